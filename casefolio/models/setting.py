"""
Site settings models.
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Text
from sqlmodel import Field, SQLModel

from casefolio.models.common import utcnow


class SiteSetting(SQLModel, table=True):
    """Admin configuration settings stored in database."""

    __tablename__ = "site_settings"

    id: Optional[int] = Field(default=None, primary_key=True)
    key: str = Field(unique=True, max_length=100)
    value: Optional[str] = Field(default=None, sa_type=Text)
    description: Optional[str] = Field(default=None, sa_type=Text)
    category: str = Field(max_length=100)
    type: str = Field(max_length=20)  # text, number, boolean, json, ...
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)
