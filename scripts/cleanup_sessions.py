#!/usr/bin/env python3
"""
Remove expired login sessions.

Meant to run periodically, e.g. from cron:
    0 * * * * python scripts/cleanup_sessions.py
"""

import asyncio
import logging
import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from casefolio.database.engine import create_database_engine
from casefolio.database.session import create_session_factory
from casefolio.services.config_service import AppConfig
from casefolio.services.session_service import SessionService

logger = logging.getLogger(__name__)


async def cleanup_sessions(config: AppConfig) -> int:
    """
    Delete every session row past its expiry.

    Returns:
        Number of sessions removed
    """
    engine = create_database_engine(config)
    try:
        async with create_session_factory(engine)() as session:
            cleaned_count = await SessionService(config).cleanup_expired_sessions(session)
    finally:
        await engine.dispose()

    logger.info(f"Session cleanup completed: {cleaned_count} sessions removed")
    return cleaned_count


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    try:
        asyncio.run(cleanup_sessions(AppConfig.from_env()))
    except Exception as e:
        logger.error(f"❌ Session cleanup failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
