"""
Database initialization script.
"""
import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncEngine
from sqlmodel import SQLModel

from casefolio.database.engine import create_database_engine
from casefolio.services.config_service import AppConfig

logger = logging.getLogger("casefolio.database")


async def create_tables(engine: AsyncEngine) -> None:
    """
    Create every table known to the models, skipping existing ones.

    Args:
        engine: Async database engine
    """
    # Register table models on the metadata
    from casefolio.models import case_study, contact, session, setting, user  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database tables created")


async def init_database(config: AppConfig) -> None:
    """
    Initialize database schema.
    """
    logger.info("Initializing database...")
    engine = create_database_engine(config)
    try:
        await create_tables(engine)
        logger.info("Database initialization completed")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise
    finally:
        await engine.dispose()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    asyncio.run(init_database(AppConfig.from_env()))
