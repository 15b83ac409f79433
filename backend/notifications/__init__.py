"""
Outbound notifications for the scheduled jobs.

This module handles:
- Composing reminder, roll-call and daily digest emails
- Sending email via Resend
- Resolving user ids to email addresses
- Writing error reports for failed sends
"""

from .email_sender import (
    send_email,
    send_organization_digest,
    send_project_digest,
    send_reminder_email,
    send_roll_call_email,
)
from .identity import IdentityLookupError, get_user_email

__all__ = [
    'send_email',
    'send_reminder_email',
    'send_roll_call_email',
    'send_organization_digest',
    'send_project_digest',
    'get_user_email',
    'IdentityLookupError',
]
