#!/usr/bin/env python3
"""
Readiness check for a running Casefolio deployment.
Checks the database and the web application.
"""

import asyncio
import logging
import os
import sys
from pathlib import Path

import requests
from sqlalchemy import text

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from casefolio.database.engine import create_database_engine
from casefolio.services.config_service import AppConfig

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


async def _ping_database() -> None:
    engine = create_database_engine(AppConfig.from_env())
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    finally:
        await engine.dispose()


def check_database():
    """Check that the database accepts connections"""
    try:
        asyncio.run(_ping_database())
        logger.info("✅ Database reachable")
        return True
    except Exception as e:
        logger.error(f"❌ Database unreachable: {e}")
        return False


def check_web_app():
    """Check the application's readiness endpoint"""
    try:
        base_url = os.getenv("APP_BASE_URL", "http://localhost:8000")

        response = requests.get(f"{base_url}/health", timeout=10)
        if response.status_code == 200:
            logger.info("✅ Web application ready")
            return True
        else:
            logger.error(f"❌ Web application not ready: HTTP {response.status_code}")
            return False
    except Exception as e:
        logger.error(f"❌ Web application unreachable: {e}")
        return False


def main():
    logger.info("🔍 Checking Casefolio readiness")

    checks = [
        ("Database", check_database),
        ("Web application", check_web_app),
    ]

    results = []
    for name, check_func in checks:
        logger.info(f"Checking {name}...")
        results.append((name, check_func()))

    logger.info("📊 Results:")
    for name, result in results:
        status = "✅ OK" if result else "❌ FAIL"
        logger.info(f"  {name}: {status}")

    failed_checks = [name for name, result in results if not result]
    if failed_checks:
        logger.error(f"Unavailable components: {', '.join(failed_checks)}")
        sys.exit(1)

    logger.info("🎉 All components ready")


if __name__ == "__main__":
    main()
