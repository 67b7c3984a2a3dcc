"""
Portfolio case study model.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import DateTime, Text
from sqlmodel import Field, SQLModel

from casefolio.models.common import text_array_column, utcnow


class CaseStudy(SQLModel, table=True):
    """A published portfolio entry, looked up publicly by slug."""

    __tablename__ = "case_studies"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(sa_type=Text)
    slug: str = Field(unique=True, index=True, max_length=255)
    excerpt: str = Field(sa_type=Text)
    description: str = Field(sa_type=Text)
    cover_image: str = Field(sa_type=Text)
    client_name: Optional[str] = Field(default=None, sa_type=Text)
    client_industry: Optional[str] = Field(default=None, sa_type=Text)
    duration: Optional[str] = Field(default=None, sa_type=Text)
    services: Optional[List[str]] = Field(default=None, sa_column=text_array_column())
    challenge: Optional[str] = Field(default=None, sa_type=Text)
    solution: Optional[str] = Field(default=None, sa_type=Text)
    result: Optional[str] = Field(default=None, sa_type=Text)
    images: Optional[List[str]] = Field(default=None, sa_column=text_array_column())
    technologies: List[str] = Field(sa_column=text_array_column(nullable=False))
    testimonial: Optional[str] = Field(default=None, sa_type=Text)
    testimonial_author: Optional[str] = Field(default=None, sa_type=Text)
    testimonial_role: Optional[str] = Field(default=None, sa_type=Text)
    website_url: Optional[str] = Field(default=None, sa_type=Text)
    featured: bool = Field(default=False)
    publish_date: datetime = Field(default_factory=utcnow, sa_type=DateTime)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)
