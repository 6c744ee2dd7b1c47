import logging

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from taskscope.config import settings

logger = logging.getLogger(__name__)

_engine: AsyncEngine | None = None
_AsyncSessionLocal: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    """Create the event store engine on first use."""
    global _engine
    if _engine is None:
        logger.info("Creating async event store engine")
        _engine = create_async_engine(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            pool_pre_ping=True,
            pool_recycle=300,
            echo=settings.debug,
        )
    return _engine


def get_session_local() -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the lazily created engine."""
    global _AsyncSessionLocal
    if _AsyncSessionLocal is None:
        _AsyncSessionLocal = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
    return _AsyncSessionLocal


async def dispose_engine():
    """Dispose of the engine so the next caller (or forked worker) starts fresh."""
    global _engine, _AsyncSessionLocal
    if _engine is not None:
        await _engine.dispose()
        logger.info("Event store engine disposed")
    _engine = None
    _AsyncSessionLocal = None
