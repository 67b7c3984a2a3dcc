"""
Contact form submissions.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Text
from sqlmodel import Field, SQLModel

from casefolio.models.common import utcnow


class ContactMessage(SQLModel, table=True):
    """Message left through the public contact form."""

    __tablename__ = "contact_messages"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(sa_type=Text)
    email: str = Field(sa_type=Text)
    subject: str = Field(sa_type=Text)
    message: str = Field(sa_type=Text)
    read: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)
