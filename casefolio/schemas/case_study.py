"""
Case study request schemas.
"""
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

NON_NULLABLE_FIELDS = ("title", "slug", "excerpt", "description", "cover_image", "technologies", "featured")


class CaseStudyCreate(BaseModel):
    """Fields accepted when creating a case study."""

    title: str = Field(min_length=1)
    slug: str = Field(min_length=1)
    excerpt: str = Field(min_length=1)
    description: str = Field(min_length=1)
    cover_image: str = Field(min_length=5)
    client_name: Optional[str] = None
    client_industry: Optional[str] = None
    duration: Optional[str] = None
    services: Optional[List[str]] = None
    challenge: Optional[str] = None
    solution: Optional[str] = None
    result: Optional[str] = None
    images: Optional[List[str]] = None
    technologies: List[str] = Field(min_length=1)
    testimonial: Optional[str] = None
    testimonial_author: Optional[str] = None
    testimonial_role: Optional[str] = None
    website_url: Optional[str] = None
    featured: Optional[bool] = None


class CaseStudyUpdate(BaseModel):
    """Partial update: only the fields present in the payload are applied."""

    title: Optional[str] = Field(default=None, min_length=1)
    slug: Optional[str] = Field(default=None, min_length=1)
    excerpt: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    cover_image: Optional[str] = Field(default=None, min_length=5)
    client_name: Optional[str] = None
    client_industry: Optional[str] = None
    duration: Optional[str] = None
    services: Optional[List[str]] = None
    challenge: Optional[str] = None
    solution: Optional[str] = None
    result: Optional[str] = None
    images: Optional[List[str]] = None
    technologies: Optional[List[str]] = Field(default=None, min_length=1)
    testimonial: Optional[str] = None
    testimonial_author: Optional[str] = None
    testimonial_role: Optional[str] = None
    website_url: Optional[str] = None
    featured: Optional[bool] = None

    @field_validator(*NON_NULLABLE_FIELDS)
    @classmethod
    def reject_null(cls, value):
        # Only runs for values present in the payload
        if value is None:
            raise ValueError("Field cannot be null")
        return value
