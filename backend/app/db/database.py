import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker, AsyncEngine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from app.config import Config

logger = logging.getLogger(__name__)


# SQLAlchemy Base for ORM models
class Base(DeclarativeBase):
    pass


ASYNC_DRIVERS = {
    "postgresql://": "postgresql+asyncpg://",
    "postgres://": "postgresql+asyncpg://",
    "mysql://": "mysql+aiomysql://",
    "sqlite://": "sqlite+aiosqlite://",
}


def get_async_url(url: str) -> str:
    """Convert database URL to async SQLAlchemy format."""
    for prefix, async_prefix in ASYNC_DRIVERS.items():
        if url.startswith(prefix):
            return async_prefix + url[len(prefix):]
    return url


def get_engine_options(url: str, ssl: str | None = None, echo: bool = False) -> dict[str, Any]:
    """Engine keyword arguments for the given (async) database URL."""
    options: dict[str, Any] = {"echo": echo}
    if url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
        # One shared connection, otherwise each session gets its own empty database
        if ":memory:" in url or url.rstrip("/").endswith("sqlite+aiosqlite:"):
            options["poolclass"] = StaticPool
    elif url.startswith("postgresql+asyncpg") and ssl and ssl != "disable":
        options["connect_args"] = {"ssl": ssl}
    return options


class Database:
    """Process-wide handle on the engine and session factory.

    Created once, opened by the application lifespan and closed on shutdown.
    """

    def __init__(self, url: str | None = None, ssl: str | None = None, echo: bool | None = None):
        self.url = get_async_url(url or Config.DATABASE_URL)
        self.ssl = Config.DB_SSL if ssl is None else ssl
        self.echo = Config.DB_ECHO if echo is None else echo
        self.engine: AsyncEngine | None = None
        self.session_factory: async_sessionmaker[AsyncSession] | None = None

    async def connect(self):
        """Create the engine, check connectivity and create missing tables."""
        # Register ORM models on Base.metadata
        from app.models import product  # noqa: F401

        self.engine = create_async_engine(
            self.url,
            **get_engine_options(self.url, self.ssl, self.echo)
        )
        self.session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )

        try:
            async with self.engine.begin() as conn:
                await conn.execute(text("SELECT 1"))
                await conn.run_sync(Base.metadata.create_all)
        except Exception:
            await self.disconnect()
            raise

        logger.info("Database connected and models synchronized")

    async def disconnect(self):
        """Close database engine."""
        if self.engine:
            await self.engine.dispose()
            logger.info("Database connection closed")
        self.engine = None
        self.session_factory = None

    async def ping(self) -> bool:
        """Return True when the database answers a trivial query."""
        if not self.engine:
            return False
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Database ping failed: {e}")
            return False

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        if not self.session_factory:
            await self.connect()

        async with self.session_factory() as session:
            yield session


db = Database()


async def get_session(request: Request) -> AsyncIterator[AsyncSession]:
    """FastAPI dependency: a session from the Database on app.state."""
    database: Database = request.app.state.db
    async with database.session() as session:
        yield session
