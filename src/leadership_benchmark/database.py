"""Async SQLAlchemy engine and per-request session management."""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from leadership_benchmark.observability import get_logger

logger = get_logger(__name__)

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def init_database(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create the module-level engine and session factory.

    Args:
        database_url: SQLAlchemy async URL (e.g. postgresql+asyncpg://...).
        echo: Log emitted SQL when True.

    Returns:
        The created AsyncEngine.
    """
    global _engine, _session_factory
    _engine = create_async_engine(database_url, echo=echo, pool_pre_ping=True)
    _session_factory = async_sessionmaker(_engine, expire_on_commit=False)
    logger.info("Database initialised", dialect=_engine.dialect.name)
    return _engine


async def close_database() -> None:
    """Dispose of the engine's connection pool."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding one session per request.

    Commits when the request handler returns normally and rolls back when it
    raises.

    Yields:
        An AsyncSession bound to the module-level engine.

    Raises:
        RuntimeError: If init_database() has not been called.
    """
    if _session_factory is None:
        raise RuntimeError("Database not initialised; call init_database() first")

    async with _session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
