"""Job identifiers and the summary returned to the cron invoker."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class JobType(str, Enum):
    REMINDER_EMAILS = "reminder-emails"
    ROLL_CALL_EMAILS = "roll-call-emails"
    DAILY_DIGEST_EMAILS = "daily-digest-emails"
    SENIOR_PROJECT_DAILY_DIGEST = "senior-project-daily-digest"
    ROLL_FORWARD_OPPORTUNITIES = "roll-forward-opportunities"


class JobResult(BaseModel):
    """
    Aggregate outcome of one job run. Never persisted.

    Serialized with camelCase keys (emailsSent, emailsFailed) and without
    the counters a job does not report.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool
    emails_sent: int | None = None
    emails_failed: int | None = None
    updated: int | None = None
    error: str | None = None
    message: str | None = None

    @classmethod
    def failure(cls, error: str, **counts: int) -> "JobResult":
        return cls(success=False, error=error, **counts)

    def to_response(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
