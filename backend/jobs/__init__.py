"""
Scheduled notification and recurrence jobs.

This package handles:
- Authorizing cron invocations and routing them to a job (jobs.dispatcher)
- Day-before reminders to volunteers
- Roll-call notices to organizers shortly before an opportunity starts
- Daily signup digests for organizations and senior projects
- Rolling recurring opportunities forward to their next occurrence
"""

from .errors import InvalidJobTypeError, JobError, QueryError, UnauthorizedError

__all__ = [
    "JobError",
    "UnauthorizedError",
    "InvalidJobTypeError",
    "QueryError",
]
