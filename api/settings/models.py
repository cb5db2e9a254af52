"""
Models for the Settings API
"""

from datetime import datetime
from typing import List
from sqlmodel import SQLModel, Field, Column
from sqlalchemy import JSON
from pydantic import ConfigDict, field_validator

from core.forms import split_list
from core.models import TimestampedModel

# The settings table holds exactly one row, always under this id
SINGLETON_ID = 1


class ProfileSettings(TimestampedModel, table=True):
    """
    Site-wide profile shown on the home and about pages.
    There is exactly one row, created on first access.
    """
    __tablename__ = "profile_settings"

    id: int = Field(default=SINGLETON_ID, primary_key=True)
    owner_name: str = Field(default="", max_length=255)
    job_title: str = Field(default="", max_length=255)
    specialization: str = Field(default="", max_length=255)
    home_page_intro_paragraph: str = Field(default="")
    about_me_introduction: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    about_me_philosophy: str = Field(default="")
    profile_photo_url: str | None = Field(default=None, max_length=2048)
    stored_profile_photo_path: str | None = Field(default=None, max_length=1024)

    model_config = ConfigDict(from_attributes=True)


class ProfileSettingsUpdate(SQLModel):
    """
    Represents the data needed to update the profile.
    Only the fields that are sent are changed.
    """
    owner_name: str | None = None
    job_title: str | None = None
    specialization: str | None = None
    home_page_intro_paragraph: str | None = None
    about_me_introduction: List[str] | None = None
    about_me_philosophy: str | None = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("about_me_introduction", mode="before")
    @classmethod
    def split_paragraphs(cls, value):
        # One paragraph per line, blank lines dropped
        return split_list(value, separator="\n")


class ProfilePhotoForm(SQLModel):
    """The photo upload carries no metadata fields"""

    model_config = ConfigDict(extra="forbid")


class ProfileSettingsPublic(SQLModel):
    owner_name: str
    job_title: str
    specialization: str
    home_page_intro_paragraph: str
    about_me_introduction: List[str]
    about_me_philosophy: str
    profile_photo_url: str | None
    created_at: datetime
    updated_at: datetime


class ProfilePhotoResponse(SQLModel):
    message: str
    profile_photo_url: str | None
