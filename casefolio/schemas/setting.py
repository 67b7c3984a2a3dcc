"""
Site setting schemas.
"""
from typing import Optional

from pydantic import BaseModel, Field


class SettingSave(BaseModel):
    """
    Upsert payload for one setting.

    ``value`` must be present but may be null; ``type`` and ``description``
    fall back to ``"text"`` and ``""``.
    """

    key: str = Field(min_length=1, max_length=100)
    value: Optional[str]
    category: str = Field(min_length=1, max_length=100)
    type: str = Field(default="text", min_length=1, max_length=20)
    description: str = ""
