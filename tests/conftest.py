"""
Pytest configuration and fixtures for Casefolio tests.
"""

import asyncio

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from casefolio.database.engine import create_database_engine
from casefolio.database.init_db import create_tables
from casefolio.database.session import create_session_factory
from casefolio.main import create_app
from casefolio.schemas.user import UserCreate
from casefolio.services.auth_service import register_user
from casefolio.services.config_service import AppConfig
from casefolio.services.storage import DatabaseStorage

TEST_PASSWORD = "correct horse battery staple"


class RecordingEmailService:
    """Stands in for EmailService and remembers what would have been sent."""

    def __init__(self, succeed: bool = True):
        self.succeed = succeed
        self.sent = []

    def send_contact_form_email(self, name, email, subject, message):
        self.sent.append({"kind": "contact", "name": name, "email": email, "subject": subject, "message": message})
        return self.succeed

    def send_new_case_study_notification(self, title, slug, client=None):
        self.sent.append({"kind": "case_study", "title": title, "slug": slug, "client": client})
        return self.succeed


@pytest.fixture
def test_config(tmp_path):
    """Configuration pointing at a throwaway SQLite database."""
    return AppConfig(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        environment="test",
        session_secret="test-session-secret",
        create_tables=True,
    )


@pytest_asyncio.fixture
async def storage(test_config):
    """Storage bound to a fresh database."""
    engine = create_database_engine(test_config)
    await create_tables(engine)
    session_factory = create_session_factory(engine)

    async with session_factory() as session:
        yield DatabaseStorage(session)

    await engine.dispose()


async def _seed_users(config: AppConfig) -> None:
    engine = create_database_engine(config)
    await create_tables(engine)
    try:
        async with create_session_factory(engine)() as session:
            storage = DatabaseStorage(session)
            await register_user(
                storage, UserCreate(username="admin", password=TEST_PASSWORD, email="admin@example.com", is_admin=True)
            )
            await register_user(
                storage, UserCreate(username="editor", password=TEST_PASSWORD, email="editor@example.com")
            )
    finally:
        await engine.dispose()


@pytest.fixture
def email_outbox():
    return RecordingEmailService()


@pytest.fixture
def client(test_config, email_outbox):
    """Test client with an admin and a non-admin account already stored."""
    asyncio.run(_seed_users(test_config))

    app = create_app(test_config)
    app.state.email_service = email_outbox

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_client(client):
    """Test client logged in as the admin."""
    response = client.post("/api/login", json={"username": "admin", "password": TEST_PASSWORD})
    assert response.status_code == 200
    return client


@pytest.fixture
def case_study_payload():
    return {
        "title": "Checkout Redesign",
        "slug": "checkout-redesign",
        "excerpt": "Cutting checkout abandonment in half.",
        "description": "A full redesign of the checkout flow.",
        "cover_image": "/images/checkout.png",
        "client_name": "Acme Retail",
        "services": ["UX research", "Frontend"],
        "technologies": ["React", "FastAPI"],
        "featured": True,
    }
