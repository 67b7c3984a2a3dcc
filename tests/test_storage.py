"""
Tests for the storage service against a temporary SQLite database.
"""

from datetime import timedelta

import pytest
from sqlalchemy import select

from casefolio.models.common import utcnow
from casefolio.models.session import WebSession
from casefolio.schemas.case_study import CaseStudyCreate, CaseStudyUpdate
from casefolio.schemas.contact import ContactMessageCreate
from casefolio.schemas.setting import SettingSave
from casefolio.schemas.user import UserCreate
from casefolio.services.storage import ConstraintViolationError, NotFoundError


def make_case_study(slug: str, featured: bool = False, **overrides) -> CaseStudyCreate:
    fields = {
        "title": f"Case study {slug}",
        "slug": slug,
        "excerpt": "Short summary",
        "description": "Long description",
        "cover_image": f"/images/{slug}.png",
        "technologies": ["Python"],
        "featured": featured,
    }
    fields.update(overrides)
    return CaseStudyCreate(**fields)


def make_message(subject: str) -> ContactMessageCreate:
    return ContactMessageCreate(name="Jo Doe", email="jo@example.com", subject=subject, message="Hello there")


class TestUsers:
    """Test user operations."""

    @pytest.mark.asyncio
    async def test_create_and_lookup_user(self, storage):
        created = await storage.create_user(UserCreate(username="owner", password="hashed", email="owner@example.com"))

        assert created.id is not None
        assert created.is_admin is False
        assert created.created_at is not None

        by_id = await storage.get_user(created.id)
        by_name = await storage.get_user_by_username("owner")
        assert by_id.username == "owner"
        assert by_name.id == created.id

    @pytest.mark.asyncio
    async def test_missing_user_is_none(self, storage):
        assert await storage.get_user(999) is None
        assert await storage.get_user_by_username("nobody") is None

    @pytest.mark.asyncio
    async def test_duplicate_username_rejected(self, storage):
        await storage.create_user(UserCreate(username="owner", password="a", email="a@example.com"))

        with pytest.raises(ConstraintViolationError):
            await storage.create_user(UserCreate(username="owner", password="b", email="b@example.com"))


class TestCaseStudies:
    """Test case study operations."""

    @pytest.mark.asyncio
    async def test_lookup_by_slug_returns_created_record(self, storage):
        created = await storage.create_case_study(make_case_study("mobile-banking", services=["Design"]))

        found = await storage.get_case_study_by_slug("mobile-banking")
        assert found is not None
        assert found.id == created.id
        assert found.title == "Case study mobile-banking"
        assert found.services == ["Design"]
        assert found.technologies == ["Python"]
        assert found.images is None

    @pytest.mark.asyncio
    async def test_create_sets_timestamps_and_default_featured(self, storage):
        created = await storage.create_case_study(make_case_study("plain", featured=None))

        assert created.featured is False
        assert created.publish_date is not None
        assert created.created_at == created.updated_at

    @pytest.mark.asyncio
    async def test_duplicate_slug_rejected_and_original_kept(self, storage):
        first = await storage.create_case_study(make_case_study("shared", title="Original"))
        first_id = first.id

        with pytest.raises(ConstraintViolationError):
            await storage.create_case_study(make_case_study("shared", title="Impostor"))

        found = await storage.get_case_study_by_slug("shared")
        assert found.id == first_id
        assert found.title == "Original"
        assert len(await storage.get_case_studies()) == 1

    @pytest.mark.asyncio
    async def test_list_ordered_newest_first(self, storage):
        for slug in ("first", "second", "third"):
            await storage.create_case_study(make_case_study(slug))

        studies = await storage.get_case_studies()

        assert [study.slug for study in studies] == ["third", "second", "first"]
        publish_dates = [study.publish_date for study in studies]
        assert publish_dates == sorted(publish_dates, reverse=True)

    @pytest.mark.asyncio
    async def test_list_filters_compose(self, storage):
        await storage.create_case_study(make_case_study("a", featured=True))
        await storage.create_case_study(make_case_study("b", featured=False))
        await storage.create_case_study(make_case_study("c", featured=True))
        await storage.create_case_study(make_case_study("d", featured=True))

        featured = await storage.get_case_studies(featured=True)
        assert [study.slug for study in featured] == ["d", "c", "a"]
        assert all(study.featured for study in featured)

        not_featured = await storage.get_case_studies(featured=False)
        assert [study.slug for study in not_featured] == ["b"]

        limited = await storage.get_case_studies(limit=2)
        assert [study.slug for study in limited] == ["d", "c"]

        both = await storage.get_case_studies(limit=1, featured=True)
        assert [study.slug for study in both] == ["d"]

    @pytest.mark.asyncio
    async def test_partial_update_changes_only_given_fields(self, storage):
        created = await storage.create_case_study(make_case_study("update-me", client_name="Acme"))
        before = created.model_dump()

        updated = await storage.update_case_study(created.id, CaseStudyUpdate(title="X"))
        after = updated.model_dump()

        assert after["title"] == "X"
        assert after["updated_at"] >= before["updated_at"]
        for field in before:
            if field not in ("title", "updated_at"):
                assert after[field] == before[field], field

    @pytest.mark.asyncio
    async def test_update_can_clear_optional_field(self, storage):
        created = await storage.create_case_study(make_case_study("clear-me", client_name="Acme"))

        updated = await storage.update_case_study(created.id, CaseStudyUpdate(client_name=None))

        assert updated.client_name is None
        assert updated.slug == "clear-me"

    @pytest.mark.asyncio
    async def test_update_missing_case_study(self, storage):
        with pytest.raises(NotFoundError):
            await storage.update_case_study(404, CaseStudyUpdate(title="X"))

    @pytest.mark.asyncio
    async def test_update_to_taken_slug_rejected(self, storage):
        await storage.create_case_study(make_case_study("taken"))
        other = await storage.create_case_study(make_case_study("other"))

        with pytest.raises(ConstraintViolationError):
            await storage.update_case_study(other.id, CaseStudyUpdate(slug="taken"))

    @pytest.mark.asyncio
    async def test_delete_case_study(self, storage):
        created = await storage.create_case_study(make_case_study("short-lived"))

        assert await storage.delete_case_study(created.id) is True
        assert await storage.get_case_study(created.id) is None
        assert await storage.get_case_study_by_slug("short-lived") is None

    @pytest.mark.asyncio
    async def test_delete_missing_case_study(self, storage):
        await storage.create_case_study(make_case_study("survivor"))

        assert await storage.delete_case_study(999) is False
        assert len(await storage.get_case_studies()) == 1


class TestContactMessages:
    """Test contact message operations."""

    @pytest.mark.asyncio
    async def test_messages_newest_first_with_filters(self, storage):
        first = await storage.create_contact_message(make_message("one"))
        await storage.create_contact_message(make_message("two"))
        await storage.create_contact_message(make_message("three"))
        await storage.mark_message_as_read(first.id)

        all_messages = await storage.get_contact_messages()
        assert [m.subject for m in all_messages] == ["three", "two", "one"]

        unread = await storage.get_contact_messages(unread_only=True)
        assert [m.subject for m in unread] == ["three", "two"]

        limited = await storage.get_contact_messages(limit=1)
        assert [m.subject for m in limited] == ["three"]

        limited_unread = await storage.get_contact_messages(limit=5, unread_only=True)
        assert len(limited_unread) == 2

    @pytest.mark.asyncio
    async def test_new_message_is_unread(self, storage):
        created = await storage.create_contact_message(make_message("hello"))

        fetched = await storage.get_contact_message(created.id)
        assert fetched.read is False
        assert fetched.message == "Hello there"

    @pytest.mark.asyncio
    async def test_mark_as_read_is_idempotent(self, storage):
        created = await storage.create_contact_message(make_message("hello"))

        assert await storage.mark_message_as_read(created.id) is True
        assert (await storage.get_contact_message(created.id)).read is True

        assert await storage.mark_message_as_read(created.id) is True
        assert (await storage.get_contact_message(created.id)).read is True

    @pytest.mark.asyncio
    async def test_mark_missing_message(self, storage):
        assert await storage.mark_message_as_read(12345) is False

    @pytest.mark.asyncio
    async def test_delete_message(self, storage):
        created = await storage.create_contact_message(make_message("bye"))

        assert await storage.delete_contact_message(created.id) is True
        assert await storage.get_contact_message(created.id) is None
        assert await storage.delete_contact_message(created.id) is False


class TestSettings:
    """Test site setting operations."""

    @pytest.mark.asyncio
    async def test_save_setting_inserts_then_updates(self, storage):
        first = await storage.save_setting(
            SettingSave(key="theme", value="dark", category="appearance", type="text")
        )
        assert first.value == "dark"
        assert first.description == ""

        second = await storage.save_setting(
            SettingSave(key="theme", value="light", category="appearance", type="text", description="Colour scheme")
        )

        assert second.id == first.id
        assert second.value == "light"
        assert second.description == "Colour scheme"

        settings = await storage.get_all_settings()
        theme_rows = [s for s in settings if s.key == "theme"]
        assert len(theme_rows) == 1
        assert theme_rows[0].value == "light"

    @pytest.mark.asyncio
    async def test_save_setting_changes_category_and_type(self, storage):
        await storage.save_setting(SettingSave(key="max_items", value="10", category="general"))

        saved = await storage.save_setting(SettingSave(key="max_items", value="12", category="layout", type="number"))

        assert saved.category == "layout"
        assert saved.type == "number"
        assert (await storage.get_setting("max_items")).value == "12"

    @pytest.mark.asyncio
    async def test_save_setting_accepts_null_value(self, storage):
        saved = await storage.save_setting(SettingSave(key="banner", value=None, category="general"))

        assert saved.value is None
        assert saved.type == "text"

    @pytest.mark.asyncio
    async def test_get_missing_setting(self, storage):
        assert await storage.get_setting("nope") is None

    @pytest.mark.asyncio
    async def test_settings_by_category_sorted_by_key(self, storage):
        for key in ("zeta", "alpha", "mid"):
            await storage.save_setting(SettingSave(key=key, value="1", category="seo"))
        await storage.save_setting(SettingSave(key="other", value="1", category="social"))

        settings = await storage.get_settings_by_category("seo")

        assert [s.key for s in settings] == ["alpha", "mid", "zeta"]

    @pytest.mark.asyncio
    async def test_all_settings_sorted_by_category_then_key(self, storage):
        for category, key in [("social", "twitter"), ("appearance", "theme"), ("social", "github"), ("appearance", "font")]:
            await storage.save_setting(SettingSave(key=key, value="x", category=category))

        settings = await storage.get_all_settings()

        assert [(s.category, s.key) for s in settings] == [
            ("appearance", "font"),
            ("appearance", "theme"),
            ("social", "github"),
            ("social", "twitter"),
        ]


class TestTimestamps:
    """Timestamps are stored as naive UTC and read back unchanged."""

    @staticmethod
    def assert_naive_recent(value, before):
        assert value.tzinfo is None
        assert before <= value <= utcnow()

    @pytest.mark.asyncio
    async def test_every_entity_round_trips_its_timestamps(self, storage):
        before = utcnow()

        user = await storage.create_user(UserCreate(username="owner", password="x", email="o@example.com"))
        study = await storage.create_case_study(make_case_study("timestamps"))
        message = await storage.create_contact_message(make_message("timestamps"))
        setting = await storage.save_setting(SettingSave(key="theme", value="dark", category="appearance"))
        storage.session.add(WebSession(sid="fresh", sess={"user_id": user.id}, expire=before + timedelta(hours=1)))
        await storage.session.commit()
        ids = (user.id, study.id, message.id)

        storage.session.expunge_all()

        self.assert_naive_recent((await storage.get_user(ids[0])).created_at, before)
        stored_study = await storage.get_case_study(ids[1])
        for value in (stored_study.publish_date, stored_study.created_at, stored_study.updated_at):
            self.assert_naive_recent(value, before)
        self.assert_naive_recent((await storage.get_contact_message(ids[2])).created_at, before)
        self.assert_naive_recent((await storage.get_setting("theme")).updated_at, before)
        assert setting.updated_at.tzinfo is None

        web_session = await storage.session.scalar(select(WebSession).where(WebSession.sid == "fresh"))
        assert web_session.expire == before + timedelta(hours=1)
