"""
Database session management.
"""
import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

logger = logging.getLogger("casefolio.database")


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """Create the per-request session factory bound to ``engine``."""
    return async_sessionmaker(engine, class_=AsyncSession, autoflush=False, expire_on_commit=False)


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency to get database session.

    HTTP and validation errors raised by the route pass through untouched;
    only database failures are logged here.

    Yields:
        Database session
    """
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        try:
            logger.debug("Database session created")
            yield session
        except SQLAlchemyError as e:
            logger.error(f"Database session error: {e}")
            await session.rollback()
            raise
        finally:
            logger.debug("Database session closed")
