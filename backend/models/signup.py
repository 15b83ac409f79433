"""Pydantic models for volunteer signups."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.types import EventID, ProjectID, UserID
from shared.utils import parse_timestamp


class Signup(BaseModel):
    """Volunteer signup for an opportunity."""

    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
        coerce_numbers_to_str=True,
    )

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    institution: str | None = Field(None, alias="institute")
    event_id: EventID | None = Field(None, alias="opportunity_id")
    user_id: UserID | None = None
    created_at: datetime | None = None

    @field_validator("created_at", mode="before")
    @classmethod
    def _parse_created_at(cls, value):
        return parse_timestamp(value)


class ProjectSignup(BaseModel):
    """Volunteer signup for a senior project."""

    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
        coerce_numbers_to_str=True,
    )

    name: str | None = None
    email: str | None = None
    project_id: ProjectID | None = None
    created_at: datetime | None = None

    @field_validator("created_at", mode="before")
    @classmethod
    def _parse_created_at(cls, value):
        return parse_timestamp(value)
