"""
Models for the Project API
"""

import uuid
from datetime import datetime
from typing import List
from sqlmodel import SQLModel, Field, Column
from sqlalchemy import JSON
from pydantic import ConfigDict, field_validator

from core.forms import split_list
from core.models import TimestampedModel


class Project(TimestampedModel, table=True):
    id: uuid.UUID | None = Field(default_factory=uuid.uuid4, primary_key=True)
    title: str = Field(max_length=255)
    description: str
    project_link: str | None = Field(default=None, max_length=2048)
    github_url: str | None = Field(default=None, max_length=2048)
    technologies: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    image_url: str | None = Field(default=None, max_length=2048)
    stored_image_path: str | None = Field(default=None, max_length=1024)

    model_config = ConfigDict(from_attributes=True)


class ProjectCreate(SQLModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    project_link: str | None = None
    github_url: str | None = None
    technologies: List[str] = []

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    @field_validator("technologies", mode="before")
    @classmethod
    def split_technologies(cls, value):
        return split_list(value)


class ProjectUpdate(SQLModel):
    """Every field optional; omitted fields keep their stored value"""
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1)
    project_link: str | None = None
    github_url: str | None = None
    technologies: List[str] | None = None

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    @field_validator("technologies", mode="before")
    @classmethod
    def split_technologies(cls, value):
        return split_list(value)


class ProjectPublic(SQLModel):
    id: uuid.UUID
    title: str
    description: str
    project_link: str | None
    github_url: str | None
    technologies: List[str]
    image_url: str | None
    stored_image_path: str | None
    created_at: datetime
    updated_at: datetime
