"""Exceptions raised by the job dispatcher and the store queries."""


class JobError(Exception):
    """Base class for scheduled job failures."""


class UnauthorizedError(JobError):
    """The caller's token does not match the configured cron secret."""


class InvalidJobTypeError(JobError):
    """The requested job type is not one of the known jobs."""

    def __init__(self, job_type: object):
        super().__init__(f"Invalid job type: {job_type!r}")
        self.job_type = job_type


class QueryError(JobError):
    """A store query failed; nothing was sent or written for it."""
