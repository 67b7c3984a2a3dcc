"""
Contact form schemas.
"""
from pydantic import BaseModel, Field


class ContactMessageCreate(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    subject: str = Field(min_length=1)
    message: str = Field(min_length=1)
