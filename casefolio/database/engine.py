"""
Database engine configuration.
"""
import logging

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

from casefolio.services.config_service import AppConfig

logger = logging.getLogger("casefolio.database")


def create_database_engine(config: AppConfig) -> AsyncEngine:
    """
    Create and configure the async SQLAlchemy engine.

    Args:
        config: Application configuration

    Returns:
        Configured async engine
    """
    database_url = config.database_url

    logger.info(f"Creating database engine for: {database_url.split('@')[1] if '@' in database_url else database_url}")

    if database_url.startswith("sqlite"):
        # aiosqlite connections are cheap and tied to the loop that opened them
        return create_async_engine(database_url, poolclass=NullPool, echo=config.db_echo)

    return create_async_engine(
        database_url,
        # Connection pool settings
        pool_size=10,
        max_overflow=20,
        pool_pre_ping=True,
        pool_recycle=3600,
        echo=config.db_echo,
    )
