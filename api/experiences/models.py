"""
Models for the Experience API
"""

import uuid
from datetime import date, datetime
from typing import List
from sqlmodel import SQLModel, Field, Column
from sqlalchemy import JSON
from pydantic import ConfigDict, field_validator

from core.forms import blank_to_none, split_list
from core.models import TimestampedModel


class Experience(TimestampedModel, table=True):
    id: uuid.UUID | None = Field(default_factory=uuid.uuid4, primary_key=True)
    company: str = Field(max_length=255)
    position: str = Field(max_length=255)
    description: str
    start_date: date
    # Empty while the position is current
    end_date: date | None = None
    is_current: bool = Field(default=False)
    location: str | None = Field(default=None, max_length=255)
    technologies: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    company_logo_url: str | None = Field(default=None, max_length=2048)
    stored_logo_path: str | None = Field(default=None, max_length=1024)

    model_config = ConfigDict(from_attributes=True)


class ExperienceCreate(SQLModel):
    company: str = Field(min_length=1, max_length=255)
    position: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    start_date: date
    end_date: date | None = None
    is_current: bool = False
    location: str | None = None
    technologies: List[str] = []

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    @field_validator("technologies", mode="before")
    @classmethod
    def split_technologies(cls, value):
        return split_list(value)

    @field_validator("end_date", mode="before")
    @classmethod
    def blank_end_date(cls, value):
        return blank_to_none(value)


class ExperienceUpdate(SQLModel):
    """Every field optional; omitted fields keep their stored value"""
    company: str | None = Field(default=None, min_length=1, max_length=255)
    position: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1)
    start_date: date | None = None
    end_date: date | None = None
    is_current: bool | None = None
    location: str | None = None
    technologies: List[str] | None = None

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    @field_validator("technologies", mode="before")
    @classmethod
    def split_technologies(cls, value):
        return split_list(value)

    @field_validator("end_date", mode="before")
    @classmethod
    def blank_end_date(cls, value):
        return blank_to_none(value)


class ExperiencePublic(SQLModel):
    id: uuid.UUID
    company: str
    position: str
    description: str
    start_date: date
    end_date: date | None
    is_current: bool
    location: str | None
    technologies: List[str]
    company_logo_url: str | None
    stored_logo_path: str | None
    created_at: datetime
    updated_at: datetime
