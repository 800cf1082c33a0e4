# scopegate/adapters/outbound/persistence/database.py

import logging
from typing import AsyncGenerator
from contextlib import asynccontextmanager
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from scopegate.adapters.configuration.config import settings
from scopegate.adapters.outbound.persistence.models import Base

# Configure logger
logger = logging.getLogger(__name__)


def build_async_url(url: str) -> str:
    """Swap the synchronous driver used by migrations for its async counterpart."""
    return url.replace("postgresql+psycopg2", "postgresql+asyncpg")


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine_for(url: str) -> AsyncEngine:
    """
    Create an async engine for the given URL.

    Pool sizing only applies to server databases; SQLite connections get
    foreign key enforcement instead.
    """
    url = build_async_url(url)
    if url.startswith("sqlite"):
        # An in-memory database lives as long as its single connection
        pool_args = {"poolclass": StaticPool} if ":memory:" in url else {}
        async_engine = create_async_engine(url, echo=False, future=True, **pool_args)
        event.listen(async_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return async_engine

    return create_async_engine(
        url,
        echo=False,
        future=True,
        pool_size=20,
        max_overflow=10,
        pool_timeout=30,
        pool_recycle=1800,
        pool_pre_ping=True,
    )


database_url = build_async_url(str(settings.DATABASE_URL))
logger.info(f"Connecting to database: {database_url.split('@')[-1]}")

try:
    engine = create_engine_for(database_url)

    AsyncSessionLocal = async_sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
        expire_on_commit=False,
    )

    logger.info("Async database connection configured successfully")

except SQLAlchemyError as e:
    logger.error(f"Error connecting to database: {str(e)}")
    raise


async def create_tables(bind: AsyncEngine = None) -> None:
    """Create the clients, scopes and client_scopes tables if missing."""
    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@asynccontextmanager
async def get_db_context() -> AsyncGenerator[AsyncSession, None]:
    """
    Provides an async context for database operations,
    ensuring the session is closed at the end.

    Example:
        ```python
        async with get_db_context() as db:
            client = await client_repository.get_active_by_client_id(db, "billing")
        ```
    """
    session = AsyncSessionLocal()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency injection for use with FastAPI.

    Yields:
        AsyncSession: SQLAlchemy async session
    """
    async with get_db_context() as session:
        yield session
