"""Pydantic models for the owners that receive roll calls and digests."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.types import EmailAddress, OrganizationID, ProjectID, UserID


class Organization(BaseModel):
    """Organization hosting opportunities."""

    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
        coerce_numbers_to_str=True,
    )

    id: OrganizationID
    name: str = "Unknown organization"
    # Roll-call recipient
    contact_email: EmailAddress | None = None
    # Daily digest recipient
    reach_out_email: EmailAddress | None = None
    owner_user_id: UserID | None = Field(None, alias="owner")

    @field_validator("name", mode="before")
    @classmethod
    def _default_name(cls, value):
        return "Unknown organization" if value is None else value


class Project(BaseModel):
    """Senior project; signups are digested to its owner."""

    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
        coerce_numbers_to_str=True,
    )

    id: ProjectID
    title: str = "Untitled project"
    owner_user_id: UserID | None = Field(None, alias="user_id")

    @field_validator("title", mode="before")
    @classmethod
    def _default_title(cls, value):
        return "Untitled project" if value is None else value
