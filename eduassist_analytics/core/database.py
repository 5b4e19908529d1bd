# eduassist_analytics/core/database.py
"""Database connection and session management using SQLAlchemy."""
from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy import text
import logging

from .config import Settings, settings

logger = logging.getLogger(__name__)

# Spare connections on top of one per rollup worker (scope queries, health checks)
POOL_OVERFLOW = 4


def build_engine(config: Settings) -> AsyncEngine:
    """Create the async engine with the pool sized to the rollup concurrency."""
    if config.database_url.startswith("sqlite"):
        # Local development and tests; SQLite has no server-side timeouts
        return create_async_engine(config.database_url, echo=False)

    command_timeout = int(config.db_command_timeout_seconds)
    return create_async_engine(
        config.database_url,
        pool_size=config.rollup_concurrency,
        max_overflow=POOL_OVERFLOW,
        pool_timeout=config.db_pool_timeout_seconds,
        pool_recycle=1800,
        pool_pre_ping=True,
        echo=(config.environment == 'development'),
        connect_args={
            "command_timeout": command_timeout,
            "server_settings": {
                "jit": "off",
                "application_name": "eduassist_class_analytics",
                "statement_timeout": f"{command_timeout}s",
                "idle_in_transaction_session_timeout": "60s",
                "lock_timeout": "30s",
            }
        }
    )


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind,
        expire_on_commit=False,
        class_=AsyncSession,
        autoflush=False,
    )


engine = build_engine(settings)
AsyncSessionLocal = build_session_factory(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session for API requests with proper error handling"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception as e:
            logger.error(f"Database session error: {e}")
            await session.rollback()
            raise


async def health_check_db() -> bool:
    """Fast health check"""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
            return True
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False


async def close_db_connections():
    """Properly close all database connections"""
    await engine.dispose()
    logger.info("Database connections closed")
