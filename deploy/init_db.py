#!/usr/bin/env python3
"""
Initialize database schema for production.
Run this once after creating the database; APP_DEBUG deployments create
tables on startup instead.
"""
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy.ext.asyncio import create_async_engine

from app.config import get_settings
from app.models import Base
from app.utils.logging import configure_logging

logger = logging.getLogger("Feedbacks.deploy")


async def init_db(database_url: Optional[str] = None, echo: bool = False) -> None:
    """Create all tables that do not exist yet."""
    database_url = database_url or get_settings().database_url
    engine = create_async_engine(database_url, echo=echo)

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await engine.dispose()

    logger.info("Database schema initialized successfully")


if __name__ == "__main__":
    configure_logging()
    asyncio.run(init_db(echo=True))
