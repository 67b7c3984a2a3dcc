"""
Storage service: every read and write against the relational store.
"""

import logging
from typing import List, Optional

from fastapi import Depends
from sqlalchemy import delete, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from casefolio.database.session import get_session
from casefolio.models.case_study import CaseStudy
from casefolio.models.common import utcnow
from casefolio.models.contact import ContactMessage
from casefolio.models.setting import SiteSetting
from casefolio.models.user import User
from casefolio.schemas.case_study import CaseStudyCreate, CaseStudyUpdate
from casefolio.schemas.contact import ContactMessageCreate
from casefolio.schemas.setting import SettingSave
from casefolio.schemas.user import UserCreate

logger = logging.getLogger("casefolio.storage")

# Dialects with a native INSERT ... ON CONFLICT DO UPDATE
UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

SETTING_UPDATE_COLUMNS = ("value", "description", "category", "type", "updated_at")


class StorageError(Exception):
    """Base class for storage failures."""


class NotFoundError(StorageError):
    """The addressed row does not exist."""


class ConstraintViolationError(StorageError):
    """A write collided with a uniqueness constraint."""


class DatabaseStorage:
    """
    CRUD operations over users, case studies, contact messages and settings.

    One instance wraps one ``AsyncSession``; every write commits immediately.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.logger = logger

    async def _insert(self, record: SQLModel, entity: str) -> SQLModel:
        self.session.add(record)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            self.logger.warning(f"Rejected duplicate {entity}: {e.orig}")
            raise ConstraintViolationError(f"{entity} violates a uniqueness constraint") from e
        await self.session.refresh(record)
        return record

    # User operations

    async def get_user(self, user_id: int) -> Optional[User]:
        return await self.session.scalar(select(User).where(User.id == user_id))

    async def get_user_by_username(self, username: str) -> Optional[User]:
        return await self.session.scalar(select(User).where(User.username == username))

    async def create_user(self, user: UserCreate) -> User:
        """
        Persist a new user.

        Args:
            user: Validated user fields, password already hashed

        Returns:
            Stored user with id and created_at

        Raises:
            ConstraintViolationError: username already taken
        """
        created = await self._insert(User(**user.model_dump()), "user")
        self.logger.info(f"Created user {created.username}")
        return created

    # Case study operations

    async def get_case_study(self, case_study_id: int) -> Optional[CaseStudy]:
        return await self.session.scalar(select(CaseStudy).where(CaseStudy.id == case_study_id))

    async def get_case_study_by_slug(self, slug: str) -> Optional[CaseStudy]:
        return await self.session.scalar(select(CaseStudy).where(CaseStudy.slug == slug))

    async def get_case_studies(self, limit: Optional[int] = None, featured: Optional[bool] = None) -> List[CaseStudy]:
        """
        List case studies, most recently published first.

        Args:
            limit: Maximum number of rows, no cap when None
            featured: Keep only rows whose featured flag matches, no filter when None

        Returns:
            Case studies ordered by publish_date descending
        """
        query = select(CaseStudy)
        if featured is not None:
            query = query.where(CaseStudy.featured == featured)
        query = query.order_by(CaseStudy.publish_date.desc(), CaseStudy.id.desc())
        if limit is not None:
            query = query.limit(limit)

        result = await self.session.scalars(query)
        return list(result.all())

    async def create_case_study(self, case_study: CaseStudyCreate) -> CaseStudy:
        """
        Persist a new case study.

        Raises:
            ConstraintViolationError: slug already used
        """
        now = utcnow()
        record = CaseStudy(
            **case_study.model_dump(exclude_none=True),
            publish_date=now,
            created_at=now,
            updated_at=now,
        )
        created = await self._insert(record, "case study")
        self.logger.info(f"Created case study id={created.id} slug={created.slug}")
        return created

    async def update_case_study(self, case_study_id: int, changes: CaseStudyUpdate) -> CaseStudy:
        """
        Apply the fields present in ``changes`` and refresh updated_at.

        Args:
            case_study_id: Case study ID
            changes: Partial update, unset fields are left untouched

        Returns:
            Updated case study

        Raises:
            NotFoundError: no case study with this id
            ConstraintViolationError: new slug already used
        """
        study = await self.get_case_study(case_study_id)
        if study is None:
            raise NotFoundError(f"Case study {case_study_id} not found")

        for field, value in changes.model_dump(exclude_unset=True).items():
            setattr(study, field, value)
        study.updated_at = utcnow()

        self.session.add(study)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            self.logger.warning(f"Rejected case study update id={case_study_id}: {e.orig}")
            raise ConstraintViolationError("case study violates a uniqueness constraint") from e
        await self.session.refresh(study)
        return study

    async def delete_case_study(self, case_study_id: int) -> bool:
        result = await self.session.execute(delete(CaseStudy).where(CaseStudy.id == case_study_id))
        await self.session.commit()
        return result.rowcount > 0

    # Contact message operations

    async def get_contact_messages(self, limit: Optional[int] = None, unread_only: bool = False) -> List[ContactMessage]:
        """
        List contact messages, newest first.

        Args:
            limit: Maximum number of rows, no cap when None
            unread_only: Keep only messages not yet marked as read
        """
        query = select(ContactMessage)
        if unread_only:
            query = query.where(ContactMessage.read.is_(False))
        query = query.order_by(ContactMessage.created_at.desc(), ContactMessage.id.desc())
        if limit is not None:
            query = query.limit(limit)

        result = await self.session.scalars(query)
        return list(result.all())

    async def get_contact_message(self, message_id: int) -> Optional[ContactMessage]:
        return await self.session.scalar(select(ContactMessage).where(ContactMessage.id == message_id))

    async def create_contact_message(self, message: ContactMessageCreate) -> ContactMessage:
        created = await self._insert(ContactMessage(**message.model_dump()), "contact message")
        self.logger.info(f"Stored contact message id={created.id}")
        return created

    async def mark_message_as_read(self, message_id: int) -> bool:
        """Set read=True; returns whether the message exists, so repeat calls stay True."""
        result = await self.session.execute(
            update(ContactMessage).where(ContactMessage.id == message_id).values(read=True)
        )
        await self.session.commit()
        return result.rowcount > 0

    async def delete_contact_message(self, message_id: int) -> bool:
        result = await self.session.execute(delete(ContactMessage).where(ContactMessage.id == message_id))
        await self.session.commit()
        return result.rowcount > 0

    # Settings operations

    async def get_setting(self, key: str) -> Optional[SiteSetting]:
        return await self.session.scalar(select(SiteSetting).where(SiteSetting.key == key))

    async def get_settings_by_category(self, category: str) -> List[SiteSetting]:
        result = await self.session.scalars(
            select(SiteSetting).where(SiteSetting.category == category).order_by(SiteSetting.key.asc())
        )
        return list(result.all())

    async def get_all_settings(self) -> List[SiteSetting]:
        result = await self.session.scalars(
            select(SiteSetting).order_by(SiteSetting.category.asc(), SiteSetting.key.asc())
        )
        return list(result.all())

    async def save_setting(self, setting: SettingSave) -> SiteSetting:
        """
        Insert the setting or overwrite the existing row with the same key.

        Runs as one INSERT ... ON CONFLICT (key) DO UPDATE statement so
        concurrent writers to the same key never race on the insert.

        Args:
            setting: Validated setting

        Returns:
            Stored setting
        """
        dialect_name = self.session.get_bind().dialect.name
        insert = UPSERT_INSERTS.get(dialect_name)
        if insert is None:
            raise StorageError(f"Setting upsert is not supported on {dialect_name}")

        values = setting.model_dump()
        values["updated_at"] = utcnow()

        statement = insert(SiteSetting).values(**values)
        statement = statement.on_conflict_do_update(
            index_elements=["key"],
            set_={column: statement.excluded[column] for column in SETTING_UPDATE_COLUMNS},
        )
        await self.session.execute(statement)
        await self.session.commit()

        saved = await self.session.scalar(
            select(SiteSetting).where(SiteSetting.key == setting.key).execution_options(populate_existing=True)
        )
        self.logger.info(f"Saved setting {setting.key} category={setting.category}")
        return saved


def get_storage(session: AsyncSession = Depends(get_session)) -> DatabaseStorage:
    """Dependency providing storage bound to the request's database session."""
    return DatabaseStorage(session)
