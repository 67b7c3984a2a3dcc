#!/usr/bin/env python3
"""
Create an admin account for the Casefolio admin panel.

Usage:
    python scripts/create_admin.py --username admin --email owner@example.com
"""

import argparse
import asyncio
import getpass
import logging
import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from casefolio.database.engine import create_database_engine
from casefolio.database.session import create_session_factory
from casefolio.schemas.user import UserCreate
from casefolio.services.auth_service import register_user
from casefolio.services.config_service import AppConfig
from casefolio.services.storage import ConstraintViolationError, DatabaseStorage

logger = logging.getLogger(__name__)


async def create_admin(config: AppConfig, username: str, password: str, email: str) -> bool:
    """
    Store an admin user, leaving an existing account with the same username alone.

    Returns:
        True if the admin exists afterwards
    """
    engine = create_database_engine(config)
    session_factory = create_session_factory(engine)
    try:
        async with session_factory() as session:
            storage = DatabaseStorage(session)
            try:
                user = await register_user(
                    storage, UserCreate(username=username, password=password, email=email, is_admin=True)
                )
            except ConstraintViolationError:
                logger.info(f"User {username} already exists, nothing to do")
                return True

            logger.info(f"✅ Admin {user.username} created with id {user.id}")
            return True
    except Exception as e:
        logger.error(f"❌ Failed to create admin {username}: {e}")
        return False
    finally:
        await engine.dispose()


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    parser = argparse.ArgumentParser(description="Create a Casefolio admin user")
    parser.add_argument("--username", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", help="Prompted for when omitted")
    args = parser.parse_args()

    password = args.password or getpass.getpass("Password: ")
    if not password:
        logger.error("❌ Password must not be empty")
        sys.exit(1)

    if not asyncio.run(create_admin(AppConfig.from_env(), args.username, password, args.email)):
        sys.exit(1)


if __name__ == "__main__":
    main()
