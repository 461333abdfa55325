import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from asgi_lifespan import LifespanManager

# Make the app and deploy packages importable without installing
sys.path.append(str(Path(__file__).resolve().parents[1]))

from app.config import Settings
from app.main import create_app


@pytest.fixture()
def test_db_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest.fixture()
def make_app(test_db_url: str):
    """Build an app on a fresh database; keyword arguments override settings."""
    def _make_app(verifier=None, **overrides):
        options = {"database_url": test_db_url, "debug": True}
        options.update(overrides)
        return create_app(Settings(**options), verifier=verifier)
    return _make_app


@pytest.fixture()
def serve():
    """Async context manager running an app and yielding a client for it."""
    @asynccontextmanager
    async def _serve(litestar_app) -> AsyncIterator[AsyncClient]:
        async with LifespanManager(litestar_app):
            transport = ASGITransport(app=litestar_app)
            async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
                yield ac
    return _serve


@pytest_asyncio.fixture()
async def client(make_app, serve) -> AsyncIterator[AsyncClient]:
    async with serve(make_app()) as ac:
        yield ac
