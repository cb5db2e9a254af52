"""
Models for the Resume API
"""

import uuid
from datetime import datetime
from sqlmodel import SQLModel, Field
from pydantic import ConfigDict

from core.models import TimestampedModel


class Resume(TimestampedModel, table=True):
    """A resume PDF tailored to one field (e.g. "Data Engineering")"""

    id: uuid.UUID | None = Field(default_factory=uuid.uuid4, primary_key=True)
    field: str = Field(max_length=255)
    original_filename: str | None = Field(default=None, max_length=255)
    file_url: str | None = Field(default=None, max_length=2048)
    stored_file_path: str | None = Field(default=None, max_length=1024)
    mime_type: str | None = Field(default=None, max_length=100)
    size: int | None = None

    model_config = ConfigDict(from_attributes=True)


class ResumeCreate(SQLModel):
    field: str = Field(min_length=1, max_length=255)

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")


class ResumeUpdate(SQLModel):
    field: str | None = Field(default=None, min_length=1, max_length=255)

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")


class ResumePublic(SQLModel):
    id: uuid.UUID
    field: str
    original_filename: str | None
    file_url: str | None
    stored_file_path: str | None
    mime_type: str | None
    size: int | None
    created_at: datetime
    updated_at: datetime
