"""Pydantic models for data validation and type checking."""

from models.event import Event
from models.job import JobResult, JobType
from models.organization import Organization, Project
from models.signup import ProjectSignup, Signup

__all__ = [
    "Event",
    "Organization",
    "Project",
    "Signup",
    "ProjectSignup",
    "JobType",
    "JobResult",
]
