"""
Database configuration with async support
"""

import logging
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as AsyncSessionSQLModel

from ytmarks.core.config import settings

logger = logging.getLogger(__name__)

logger.info(f"Environment: {getattr(settings, 'ENVIRONMENT', 'Unknown')}")
logger.info(f"Storage backend: {settings.STORAGE_BACKEND}")


def create_engine_from_url(url: str, echo: bool = False) -> AsyncEngine:
    """Build an async engine; pooling options only apply to server databases."""
    options = {"echo": echo, "future": True}
    if not url.startswith("sqlite"):
        options.update(
            pool_size=5,
            max_overflow=10,
            pool_pre_ping=True,  # Verify connections before use
            pool_recycle=3600,  # Recycle connections after 1 hour
        )
    return create_async_engine(url, **options)


def create_session_factory(engine: AsyncEngine) -> sessionmaker:
    return sessionmaker(
        bind=engine,
        class_=AsyncSessionSQLModel,
        expire_on_commit=False,
        autoflush=False
    )


async_engine = create_engine_from_url(settings.ASYNC_DATABASE_URL, echo=settings.DATABASE_ECHO)

# Async session factory
AsyncSessionLocal = create_session_factory(async_engine)


async def init_db(engine: AsyncEngine = None):
    """Initialize database tables"""
    # Register table models on the metadata before create_all
    import ytmarks.models  # noqa: F401

    async with (engine or async_engine).begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
