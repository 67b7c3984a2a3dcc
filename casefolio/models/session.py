"""
Server-side login sessions.
"""
from datetime import datetime
from typing import Any, Dict

from sqlalchemy import JSON, Column, DateTime
from sqlmodel import Field, SQLModel


class WebSession(SQLModel, table=True):
    """Row in the shared ``session`` table; ``sess`` holds the session payload."""

    __tablename__ = "session"

    sid: str = Field(primary_key=True, max_length=255)
    sess: Dict[str, Any] = Field(sa_column=Column(JSON, nullable=False))
    expire: datetime = Field(index=True, sa_type=DateTime)
