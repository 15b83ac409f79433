"""
HTML and plain-text bodies for the scheduled job emails.

Builders receive data that has already been prepared by email_sender and
only handle presentation.
"""

from html import escape
from typing import Any, Dict, List

_STYLE = """
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, 'Helvetica Neue', Arial, sans-serif;
            line-height: 1.6;
            color: #374151;
            max-width: 600px;
            margin: 0 auto;
            padding: 20px;
            background-color: #f5f5f5;
        }
        .container {
            background-color: white;
            padding: 30px;
            border-radius: 8px;
            box-shadow: 0 2px 4px rgba(0,0,0,0.1);
        }
        h2 {
            color: #16a34a;
            margin-top: 0;
            font-size: 24px;
        }
        .warning-box {
            background-color: #fef3c7;
            border-left: 4px solid #f59e0b;
            padding: 15px;
            margin: 20px 0;
            color: #92400e;
        }
        .highlight-box {
            background-color: #f0fdf4;
            border-left: 4px solid #16a34a;
            padding: 15px;
            margin: 20px 0;
        }
        .detail-label {
            color: #6b7280;
            font-size: 12px;
            text-transform: uppercase;
        }
        .detail-value {
            font-weight: 600;
            margin-bottom: 10px;
        }
        .signup-item {
            background-color: #f9fafb;
            border-left: 4px solid #16a34a;
            padding: 12px 15px;
            margin: 10px 0;
        }
        .cta-button {
            display: inline-block;
            background-color: #16a34a;
            color: white;
            padding: 12px 24px;
            border-radius: 6px;
            text-decoration: none;
            font-weight: 600;
        }
        .footer {
            margin-top: 30px;
            padding-top: 20px;
            border-top: 1px solid #e5e7eb;
            font-size: 13px;
            color: #6b7280;
            text-align: center;
        }
"""


def _wrap_html(title: str, content: str) -> str:
    return f"""
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape(title)}</title>
    <style>{_STYLE}    </style>
</head>
<body>
    <div class="container">
{content}
        <div class="footer">
            <p>Voluna &bull; Connecting volunteers with their communities</p>
        </div>
    </div>
</body>
</html>
"""


def _detail(label: str, value: Any) -> str:
    return f"""
            <div class="detail-label">{escape(label)}</div>
            <div class="detail-value">{escape(str(value))}</div>
"""


def _format_hours(hours: float) -> str:
    return f"{hours:g} hours"


def build_reminder_html(data: Dict[str, Any]) -> str:
    """
    Build HTML body for the day-before reminder.

    Args:
        data: name, event_title, start_time, location, estimated_hours
    """
    details = _detail("Event", data["event_title"]) + _detail("Date & Time", data["start_time"])
    if data.get("location"):
        details += _detail("Location", data["location"])
    if data.get("estimated_hours"):
        details += _detail("Duration", _format_hours(data["estimated_hours"]))

    content = f"""
        <h2>Hi {escape(data.get('name') or 'there')}!</h2>
        <div class="warning-box">
            <strong>Reminder: your volunteer opportunity is tomorrow!</strong>
            <p>Don't forget about <strong>{escape(data['event_title'])}</strong>.</p>
        </div>
        <div class="highlight-box">
{details}
        </div>
        <p>Thank you for volunteering your time to make a difference in our community.</p>
        <p style="font-size: 14px; color: #6b7280;">
            If you need to cancel or have any questions, please contact the organization directly.
        </p>
"""
    return _wrap_html(f"Reminder: {data['event_title']}", content)


def build_reminder_text(data: Dict[str, Any]) -> str:
    text = f"""Hi {data.get('name') or 'there'}!

Reminder: {data['event_title']} is tomorrow.

Event: {data['event_title']}
Date & Time: {data['start_time']}
"""
    if data.get("location"):
        text += f"Location: {data['location']}\n"
    if data.get("estimated_hours"):
        text += f"Duration: {_format_hours(data['estimated_hours'])}\n"
    text += "\nIf you need to cancel, please contact the organization directly.\n"
    return text


def build_roll_call_html(data: Dict[str, Any]) -> str:
    """
    Build HTML body for the roll-call notice sent to the organizer.

    Args:
        data: event_title, start_time, location, signup_count, estimated_hours, roll_call_url
    """
    details = _detail("Event", data["event_title"]) + _detail("Start Time", data["start_time"])
    if data.get("location"):
        details += _detail("Location", data["location"])
    details += _detail("Volunteers", f"{data['signup_count']} signed up")
    if data.get("estimated_hours"):
        details += _detail("Duration", _format_hours(data["estimated_hours"]))

    content = f"""
        <h2>Roll Call Time!</h2>
        <div class="warning-box">
            <strong>{escape(data['event_title'])}</strong> starts in 5 minutes!
            <p>It's time to take roll call and track attendance for your volunteers.</p>
        </div>
        <div class="highlight-box">
{details}
        </div>
        <div style="text-align: center; margin: 30px 0;">
            <a href="{escape(data['roll_call_url'])}" class="cta-button">Take Roll Call Now</a>
        </div>
        <p style="font-size: 14px; color: #6b7280;">
            This roll call link will remain active throughout and after the event.
        </p>
"""
    return _wrap_html(f"Roll Call: {data['event_title']}", content)


def build_roll_call_text(data: Dict[str, Any]) -> str:
    text = f"""ROLL CALL: {data['event_title']} starts in 5 minutes!

Start Time: {data['start_time']}
"""
    if data.get("location"):
        text += f"Location: {data['location']}\n"
    text += f"Volunteers: {data['signup_count']} signed up\n"
    if data.get("estimated_hours"):
        text += f"Duration: {_format_hours(data['estimated_hours'])}\n"
    text += f"\nTake roll call: {data['roll_call_url']}\n"
    return text


def _signup_rows_html(signups: List[Dict[str, str]], detailed: bool) -> str:
    rows = ""
    for signup in signups:
        rows += f"""
            <div class="signup-item">
                <strong>{escape(signup['volunteer_name'])}</strong> &bull; {escape(signup['signup_date'])}<br>
                {escape(signup['volunteer_email'])}<br>
"""
        if detailed:
            rows += f"""
                {escape(signup['volunteer_phone'])}<br>
                {escape(signup['volunteer_institution'])}
"""
        rows += """
            </div>
"""
    return rows


def _plural(count: int) -> str:
    return "" if count == 1 else "s"


def build_organization_digest_html(
    organization_name: str,
    groups: List[Dict[str, Any]],
    total_signups: int,
    dashboard_url: str,
) -> str:
    """
    Build HTML body for an organization's daily digest.

    Args:
        organization_name: Name shown in the heading
        groups: Signups grouped per opportunity (event_title, signups)
        total_signups: Number of signups across all groups
        dashboard_url: Link to the organization's dashboard
    """
    sections = ""
    for group in groups:
        sections += f"""
        <h3 style="color: #15803d;">{escape(group['event_title'])} ({len(group['signups'])})</h3>
{_signup_rows_html(group['signups'], detailed=True)}
"""

    content = f"""
        <h2>Volunteer Sign-ups</h2>
        <div class="highlight-box">
            <strong>{escape(organization_name)} - Today's Activity</strong>
            <p><strong>{total_signups}</strong> new volunteer sign-up{_plural(total_signups)} today!</p>
        </div>
{sections}
        <p>
            <a href="{escape(dashboard_url)}" style="color: #16a34a; font-weight: 600;">Visit your dashboard</a>
            to manage your opportunities.
        </p>
        <p style="font-size: 14px; color: #6b7280;">This is an automated daily digest.</p>
"""
    return _wrap_html(f"Sign-ups: {organization_name}", content)


def build_organization_digest_text(
    organization_name: str,
    groups: List[Dict[str, Any]],
    total_signups: int,
    dashboard_url: str,
) -> str:
    text = f"""VOLUNTEER SIGN-UPS - {organization_name}
{total_signups} new volunteer sign-up{_plural(total_signups)} today

"""
    for group in groups:
        text += f"{group['event_title']} ({len(group['signups'])})\n"
        for signup in group["signups"]:
            text += (
                f"  - {signup['volunteer_name']} | {signup['volunteer_email']} | "
                f"{signup['volunteer_phone']} | {signup['volunteer_institution']}\n"
            )
        text += "\n"
    text += f"Dashboard: {dashboard_url}\n"
    return text


def build_project_digest_html(
    project_title: str,
    signups: List[Dict[str, str]],
    dashboard_url: str,
) -> str:
    """Build HTML body for a senior project's daily digest."""
    total = len(signups)
    content = f"""
        <h2>Senior Project Sign-ups</h2>
        <div class="highlight-box">
            <strong>{escape(project_title)} - Today's Activity</strong>
            <p><strong>{total}</strong> new volunteer sign-up{_plural(total)} today!</p>
        </div>
{_signup_rows_html(signups, detailed=False)}
        <p>
            <a href="{escape(dashboard_url)}" style="color: #16a34a; font-weight: 600;">Visit your dashboard</a>
            to manage your project.
        </p>
        <p style="font-size: 14px; color: #6b7280;">This is an automated daily digest for your senior project.</p>
"""
    return _wrap_html(f"Sign-ups: {project_title}", content)


def build_project_digest_text(
    project_title: str,
    signups: List[Dict[str, str]],
    dashboard_url: str,
) -> str:
    total = len(signups)
    text = f"""SENIOR PROJECT SIGN-UPS - {project_title}
{total} new volunteer sign-up{_plural(total)} today

"""
    for signup in signups:
        text += f"  - {signup['volunteer_name']} | {signup['volunteer_email']}\n"
    text += f"\nDashboard: {dashboard_url}\n"
    return text
