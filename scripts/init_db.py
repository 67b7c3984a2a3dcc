#!/usr/bin/env python3
"""
Database bootstrap for Casefolio.
Applies Alembic migrations and optionally seeds the admin account.
"""

import asyncio
import logging
import os
import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from alembic import command
from alembic.config import Config

from casefolio.services.config_service import AppConfig
from scripts.create_admin import create_admin

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


def run_migrations(config: AppConfig) -> bool:
    """Upgrade the database to the latest Alembic revision."""
    try:
        logger.info("Running Alembic migrations...")

        alembic_cfg = Config(str(project_root / "alembic.ini"))
        alembic_cfg.set_main_option("script_location", str(project_root / "migrations"))
        alembic_cfg.set_main_option("sqlalchemy.url", config.database_url)
        command.upgrade(alembic_cfg, "head")

        logger.info("✅ Migrations applied")
        return True
    except Exception as e:
        logger.error(f"❌ Migration failed: {e}")
        return False


def seed_admin(config: AppConfig) -> bool:
    """Create the admin from ADMIN_USERNAME / ADMIN_PASSWORD / ADMIN_EMAIL if set."""
    username = os.getenv("ADMIN_USERNAME")
    password = os.getenv("ADMIN_PASSWORD")
    if not username or not password:
        logger.info("ADMIN_USERNAME/ADMIN_PASSWORD not set, skipping admin seeding")
        return True

    email = os.getenv("ADMIN_EMAIL", config.notify_email)
    return asyncio.run(create_admin(config, username, password, email))


def main():
    logger.info("🚀 Initializing Casefolio database")

    config = AppConfig.from_env()
    if not os.getenv("DATABASE_URL"):
        logger.error("❌ DATABASE_URL is not set")
        sys.exit(1)

    if not run_migrations(config):
        sys.exit(1)

    if not seed_admin(config):
        sys.exit(1)

    logger.info("🎉 Database initialization finished")


if __name__ == "__main__":
    main()
