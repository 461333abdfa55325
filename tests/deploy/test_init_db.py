"""Tests for deploy/init_db.py schema creation."""

import pytest
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import create_async_engine

from deploy.init_db import init_db


@pytest.mark.asyncio
async def test_init_db_creates_feedbacks_table(tmp_path):
    url = f"sqlite+aiosqlite:///{tmp_path / 'init.db'}"

    await init_db(url)
    # Running twice is harmless
    await init_db(url)

    engine = create_async_engine(url)
    try:
        async with engine.connect() as conn:
            tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
            columns = await conn.run_sync(
                lambda sync_conn: {c["name"] for c in inspect(sync_conn).get_columns("feedbacks")}
            )
    finally:
        await engine.dispose()

    assert tables == ["feedbacks"]
    assert columns == {"id", "name", "user_id", "comment", "created_at", "updated_at"}
