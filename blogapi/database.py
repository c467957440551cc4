import logging
from typing import AsyncIterator

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from blogapi.config import settings
from blogapi.middleware import count_statements

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """
    Turn on foreign-key enforcement for every new SQLite connection.

    SQLite ships with ``PRAGMA foreign_keys`` off, which would let comments
    reference posts that do not exist.  No-op for other dialects.
    """
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def pool_options(url: str) -> dict:
    """
    Sizing arguments for the connection pool behind *url*.

    In-memory SQLite runs on a StaticPool, which rejects size and overflow
    limits, so SQLite URLs get none.  Every other backend gets a bounded
    queue: requests wait up to DB_POOL_TIMEOUT for a free connection.
    """
    if make_url(url).get_backend_name() == "sqlite":
        return {}
    return {
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
    }


# Module-level engine variable allows tests to override with a test engine.
engine = create_async_engine(
    settings.database_url,
    echo=settings.DEBUG,
    pool_pre_ping=True,
    **pool_options(settings.database_url),
)

# Count statements per request for the X-Query-Count header.
count_statements(engine)
enable_sqlite_foreign_keys(engine)


async def init_models(engine: AsyncEngine) -> None:
    """Create any missing tables.  Safe to call on every startup."""
    # Imported for its side effect of registering the tables on Base.metadata.
    import blogapi.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ready (%s)", engine.dialect.name)


async def get_db() -> AsyncIterator[AsyncEngine]:
    """
    Hand the shared engine to a request.

    Repositories check a connection out of the engine's pool per call and
    return it when the call finishes, so nothing is held between calls.
    """
    yield engine
