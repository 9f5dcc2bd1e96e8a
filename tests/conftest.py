"""
Shared fixtures for the Dipstik test-suite.

Settings are pinned through environment variables before the application is
imported, so every test sees an in-memory SQLite execution log, no Vehicle
Databases credentials and the default framework switches. The DI container is
rebuilt around each test so module registries never leak between tests.
"""

from __future__ import annotations

import asyncio
import os
import sys
from pathlib import Path
from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

TEST_ENV = {
    "DATABASE_URL": "sqlite+aiosqlite:///:memory:?cache=shared",
    "HOST": "127.0.0.1",
    "PORT": "8100",
    "LOG_LEVEL": "DEBUG",
    "EXECUTION_LOG_ENABLED": "true",
    "MODULE_ISOLATE_FAILURES": "true",
    "COMPARISON_SYMMETRIC_STRUCTURE": "false",
    "VEHICLE_DATABASES_API_KEY": "",
    "DEV_MODE": "false",
}
os.environ.update(TEST_ENV)

from dipstik.core.config import get_settings  # noqa: E402

get_settings.cache_clear()

from dipstik.core.container import reset_container  # noqa: E402
from dipstik.core.dependencies import get_session  # noqa: E402
from dipstik.core.models import ExecutionLog  # noqa: E402
from dipstik.core.models.base import Base  # noqa: E402
from dipstik.core.models.db_helper import db_helper  # noqa: E402
from dipstik.main import app  # noqa: E402


async def _recreate_schema() -> None:
    async with db_helper.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


@pytest.fixture(scope="session", autouse=True)
def prepare_database() -> Generator[None, None, None]:
    """Create the execution_logs schema once for the whole run."""
    asyncio.run(_recreate_schema())
    yield
    asyncio.run(db_helper.dispose())


@pytest_asyncio.fixture
async def db_session(prepare_database: None) -> AsyncGenerator[AsyncSession, None]:
    async with db_helper.session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()


@pytest_asyncio.fixture
async def clean_execution_logs(db_session: AsyncSession) -> None:
    """Start a test with an empty execution_logs table."""
    await db_session.execute(delete(ExecutionLog))
    await db_session.commit()


@pytest.fixture(autouse=True)
def isolated_app() -> Generator[None, None, None]:
    """Fresh container per test; sessions come straight from the test engine."""

    async def _session() -> AsyncGenerator[AsyncSession, None]:
        async with db_helper.session_factory() as session:
            yield session

    reset_container()
    app.dependency_overrides[get_session] = _session
    yield
    app.dependency_overrides.clear()
    reset_container()


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """HTTPX client bound to the ASGI app (lifespan not run)."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://testserver"
    ) as http:
        yield http
