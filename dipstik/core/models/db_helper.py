"""Database helper for async SQLAlchemy session management."""

from pathlib import Path
from typing import AsyncGenerator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from dipstik.core.config import get_settings
from dipstik.core.models.base import Base


class DatabaseHelper:
    """Helper for managing database connections and sessions."""

    def __init__(self, url: str, echo: bool = False, pool_size: int = 20, max_overflow: int = 30):
        """
        Initialize database helper.

        Args:
            url: Database connection URL
            echo: Echo SQL queries
            pool_size: Connection pool size (ignored for SQLite)
            max_overflow: Max overflow connections (ignored for SQLite)
        """
        engine_kwargs: dict = {"url": url, "echo": echo}
        if not url.startswith("sqlite"):
            engine_kwargs.update(pool_size=pool_size, max_overflow=max_overflow)

        self.url = url
        self.engine: AsyncEngine = create_async_engine(**engine_kwargs)
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            autoflush=False,
            autocommit=False,
            expire_on_commit=False,
        )

    async def create_tables(self) -> None:
        """Create missing tables. Used for SQLite where migrations are optional."""
        database = make_url(self.url).database
        if self.url.startswith("sqlite") and database and database != ":memory:":
            Path(database).parent.mkdir(parents=True, exist_ok=True)

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        """Dispose of the engine and close all connections."""
        await self.engine.dispose()

    async def session_dependency(self) -> AsyncGenerator[AsyncSession, None]:
        """FastAPI dependency for database sessions."""
        async with self.session_factory() as session:
            yield session


settings = get_settings()
db_helper = DatabaseHelper(
    url=settings.database_url,
    echo=settings.database.echo,
    pool_size=settings.database.pool_size,
    max_overflow=settings.database.max_overflow,
)
