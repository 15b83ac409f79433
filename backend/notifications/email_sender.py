"""
Email sending via Resend API for the scheduled jobs.

Prepares reminder, roll-call and daily digest data, hands it to the
templates, and sends the result. Every send reports a result dict instead
of raising so callers can count failures and keep going.
"""

import time
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

import resend

from config.settings import (
    EMAIL_SEND_DELAY_SECONDS,
    NOTIFICATION_FROM_EMAIL,
    NOTIFICATION_REPLY_TO,
    RESEND_API_KEY,
    SITE_URL,
)
from models import Event, Organization, Project, ProjectSignup, Signup
from notifications.email_templates import (
    build_organization_digest_html,
    build_organization_digest_text,
    build_project_digest_html,
    build_project_digest_text,
    build_reminder_html,
    build_reminder_text,
    build_roll_call_html,
    build_roll_call_text,
)

resend.api_key = RESEND_API_KEY


def send_email(
    to: str, subject: str, html: str, text: Optional[str] = None
) -> Dict[str, Any]:
    """
    Send one email.

    Args:
        to: Recipient address
        subject: Subject line
        html: HTML body
        text: Optional plain-text body

    Returns:
        Dictionary with 'success' (bool), 'email_id' (str if success), 'error' (str if failed)
    """
    if not to:
        return {"success": False, "error": "Missing recipient address"}

    params: Dict[str, Any] = {
        "from": f"Voluna <{NOTIFICATION_FROM_EMAIL}>",
        "to": to,
        "subject": subject,
        "html": html,
        "reply_to": NOTIFICATION_REPLY_TO,
        "headers": {"X-Entity-Ref-ID": uuid.uuid4().hex},
    }
    if text:
        params["text"] = text

    try:
        response = resend.Emails.send(params)
        result = {"success": True, "email_id": response.get("id")}
    except Exception as e:
        result = {"success": False, "error": str(e)}

    # Rate limiting between sends
    if EMAIL_SEND_DELAY_SECONDS > 0:
        time.sleep(EMAIL_SEND_DELAY_SECONDS)

    return result


def format_start_time(start_time: Optional[datetime]) -> str:
    """Human readable UTC start time, e.g. 'Wednesday, January 10, 2024 at 9:05 AM UTC'."""
    if start_time is None:
        return "Time to be announced"
    hour = start_time.strftime("%I").lstrip("0") or "12"
    return start_time.strftime(f"%A, %B %d, %Y at {hour}:%M %p UTC")


def roll_call_url(event_id: str) -> str:
    return f"{SITE_URL}/roll-call/{event_id}"


def _format_signup(signup: Signup | ProjectSignup) -> Dict[str, str]:
    created_at = signup.created_at
    row = {
        "volunteer_name": signup.name or "Unknown",
        "volunteer_email": signup.email or "No email provided",
        "signup_date": created_at.strftime("%B %d, %Y") if created_at else "Unknown date",
    }
    if isinstance(signup, Signup):
        row["volunteer_phone"] = signup.phone or "No phone provided"
        row["volunteer_institution"] = signup.institution or "No institution provided"
    return row


def _group_signups_by_event(
    signups: List[Signup], event_titles: Dict[str, str]
) -> List[Dict[str, Any]]:
    """
    Group signups under the title of the opportunity they belong to.

    Args:
        signups: Today's signups for one organization
        event_titles: Opportunity id -> title

    Returns:
        List of {'event_title', 'signups'} sorted by title
    """
    groups: Dict[str, List[Dict[str, str]]] = {}
    for signup in signups:
        title = event_titles.get(signup.event_id or "", "Unknown opportunity")
        groups.setdefault(title, []).append(_format_signup(signup))

    return [
        {"event_title": title, "signups": rows}
        for title, rows in sorted(groups.items(), key=lambda item: item[0].lower())
    ]


def send_reminder_email(
    signup: Signup, event: Event, estimated_hours: float
) -> Dict[str, Any]:
    """Send the day-before reminder to one volunteer."""
    data = {
        "name": signup.name,
        "event_title": event.title,
        "start_time": format_start_time(event.start_time),
        "location": event.location,
        "estimated_hours": estimated_hours,
    }
    return send_email(
        to=signup.email or "",
        subject=f"Reminder: {event.title} is tomorrow!",
        html=build_reminder_html(data),
        text=build_reminder_text(data),
    )


def send_roll_call_email(
    organizer_email: str, event: Event, signup_count: int, estimated_hours: float
) -> Dict[str, Any]:
    """Send the take-attendance notice for one opportunity to its organizer."""
    data = {
        "event_title": event.title,
        "start_time": format_start_time(event.start_time),
        "location": event.location,
        "signup_count": signup_count,
        "estimated_hours": estimated_hours,
        "roll_call_url": roll_call_url(event.id),
    }
    return send_email(
        to=organizer_email,
        subject=f"Roll Call Ready: {event.title} starts soon!",
        html=build_roll_call_html(data),
        text=build_roll_call_text(data),
    )


def send_organization_digest(
    organization: Organization,
    signups: List[Signup],
    event_titles: Dict[str, str],
) -> Dict[str, Any]:
    """Send one organization its summary of today's signups."""
    if not signups:
        return {"success": False, "error": "No signups to send"}

    groups = _group_signups_by_event(signups, event_titles)
    dashboard_url = f"{SITE_URL}/dashboard/{organization.id}"

    return send_email(
        to=organization.reach_out_email or "",
        subject=f"Volunteer Sign-ups - {organization.name}",
        html=build_organization_digest_html(
            organization.name, groups, len(signups), dashboard_url
        ),
        text=build_organization_digest_text(
            organization.name, groups, len(signups), dashboard_url
        ),
    )


def send_project_digest(
    owner_email: str, project: Project, signups: List[ProjectSignup]
) -> Dict[str, Any]:
    """Send a senior project owner their summary of today's signups."""
    if not signups:
        return {"success": False, "error": "No signups to send"}

    rows = [_format_signup(signup) for signup in signups]
    dashboard_url = f"{SITE_URL}/dashboard"

    return send_email(
        to=owner_email,
        subject=f"Senior Project Sign-ups - {project.title}",
        html=build_project_digest_html(project.title, rows, dashboard_url),
        text=build_project_digest_text(project.title, rows, dashboard_url),
    )
