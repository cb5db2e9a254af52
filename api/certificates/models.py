"""
Models for the Certificate API
"""

import uuid
from datetime import date, datetime
from sqlmodel import SQLModel, Field
from pydantic import ConfigDict, field_validator

from core.forms import blank_to_none
from core.models import TimestampedModel


class Certificate(TimestampedModel, table=True):
    id: uuid.UUID | None = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(max_length=255)
    issuing_organization: str = Field(max_length=255)
    description: str | None = None
    credential_id: str | None = Field(default=None, max_length=255)
    credential_url: str | None = Field(default=None, max_length=2048)
    date_issued: date | None = None
    image_url: str | None = Field(default=None, max_length=2048)
    stored_image_path: str | None = Field(default=None, max_length=1024)
    mime_type: str | None = Field(default=None, max_length=100)

    model_config = ConfigDict(from_attributes=True)


class CertificateCreate(SQLModel):
    name: str = Field(min_length=1, max_length=255)
    issuing_organization: str = Field(min_length=1, max_length=255)
    description: str | None = None
    credential_id: str | None = None
    credential_url: str | None = None
    date_issued: date | None = None

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    @field_validator("date_issued", mode="before")
    @classmethod
    def blank_date_issued(cls, value):
        return blank_to_none(value)


class CertificateUpdate(SQLModel):
    """Every field optional; omitted fields keep their stored value"""
    name: str | None = Field(default=None, min_length=1, max_length=255)
    issuing_organization: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    credential_id: str | None = None
    credential_url: str | None = None
    date_issued: date | None = None

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    @field_validator("date_issued", mode="before")
    @classmethod
    def blank_date_issued(cls, value):
        return blank_to_none(value)


class CertificatePublic(SQLModel):
    id: uuid.UUID
    name: str
    issuing_organization: str
    description: str | None
    credential_id: str | None
    credential_url: str | None
    date_issued: date | None
    image_url: str | None
    stored_image_path: str | None
    mime_type: str | None
    created_at: datetime
    updated_at: datetime
