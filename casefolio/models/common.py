"""
Shared column helpers for table models.
"""
from datetime import datetime, timezone

from sqlalchemy import JSON, Column, Text
from sqlalchemy.dialects.postgresql import ARRAY


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, matching the ``DateTime`` (timestamp without time zone) columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def text_array_column(nullable: bool = True) -> Column:
    """``text[]`` on PostgreSQL, JSON everywhere else."""
    return Column(ARRAY(Text).with_variant(JSON(), "sqlite"), nullable=nullable)
