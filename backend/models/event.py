"""Pydantic models for volunteer opportunity (event) data."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from config.settings import RECURRING_FREQUENCIES
from models.types import EventID, OrganizationID
from shared.utils import parse_timestamp


class Event(BaseModel):
    """
    Volunteer opportunity row from the `opportunities` table.

    Store column names differ from the field names for the organization
    foreign key and the roll-call marker; both are accepted.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
        coerce_numbers_to_str=True,
    )

    id: EventID
    title: str = "Untitled opportunity"
    start_time: datetime | None = None
    end_time: datetime | None = None
    duration_hours: float | None = Field(None, ge=0)
    frequency: str | None = None
    closed: bool | None = None
    location: str | None = None
    owner_org_id: OrganizationID | None = Field(None, alias="org_id")
    # Roll-call idempotency marker for the current occurrence
    notified_at: datetime | None = Field(None, alias="rollcall_email_sent_at")

    # PostgREST sends NULL columns as explicit None
    @field_validator("title", mode="before")
    @classmethod
    def _default_title(cls, value):
        return "Untitled opportunity" if value is None else value

    @field_validator("start_time", "end_time", "notified_at", mode="before")
    @classmethod
    def _parse_timestamps(cls, value):
        return parse_timestamp(value)

    @property
    def is_open(self) -> bool:
        return not self.closed

    @property
    def is_recurring(self) -> bool:
        return self.frequency in RECURRING_FREQUENCIES
