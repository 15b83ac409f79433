"""
Day-before reminder emails.

Every volunteer signed up for an opportunity starting 23-24 hours from now
gets one reminder per run. There is no sent marker for reminders: an
invoker that runs this job twice inside the same hour sends twice.
"""

from datetime import datetime
from typing import Any, Optional

from config.settings import REMINDER_WINDOW_END, REMINDER_WINDOW_START
from jobs.errors import QueryError
from jobs.queries import fetch_events_starting_between, fetch_signups_for_event
from jobs.windows import estimated_duration, rounded_hours, window_from
from models import Event, JobResult
from notifications.email_sender import send_reminder_email
from notifications.error_logger import log_notification_error
from shared.db import get_supabase_client
from shared.utils import utc_now

TAG = "[Reminder]"


def send_reminder_emails(
    supabase: Any = None, now: Optional[datetime] = None, dry_run: bool = False
) -> JobResult:
    """
    Send reminders for opportunities starting in ~24 hours.

    Closed opportunities are included; volunteers who signed up before an
    opportunity closed still get their reminder.

    Args:
        supabase: Service-role client (created from the environment if omitted)
        now: Reference time for the window (defaults to current UTC time)
        dry_run: If True, don't actually send emails

    Returns:
        JobResult with emails_sent / emails_failed
    """
    now = now or utc_now()
    supabase = supabase or get_supabase_client()
    window = window_from(now, REMINDER_WINDOW_START, REMINDER_WINDOW_END)

    print(f"{TAG} Looking for opportunities between {window.start.isoformat()} and {window.end.isoformat()}")

    try:
        events = fetch_events_starting_between(supabase, window)
    except QueryError as e:
        print(f"✗ {TAG} {e}")
        return JobResult.failure(str(e), emails_sent=0)

    if not events:
        print(f"{TAG} No upcoming opportunities in the next 24 hours.")
        return JobResult(success=True, message="No upcoming opportunities.", emails_sent=0, emails_failed=0)

    stats = {"sent": 0, "failed": 0}

    for event in events:
        try:
            _remind_volunteers(supabase, event, stats, dry_run)
        except Exception as e:
            # Anything unexpected for one opportunity must not stop the others
            print(f"  ✗ {TAG} Unexpected error for {event.title} ({event.id}): {e}")
            log_notification_error(
                error_type="reminder",
                error_message=str(e),
                context={"event_id": event.id, "event_title": event.title},
            )

    print(f"{TAG} Sent: {stats['sent']}, Failed: {stats['failed']}")
    return JobResult(success=True, emails_sent=stats["sent"], emails_failed=stats["failed"])


def _remind_volunteers(
    supabase: Any, event: Event, stats: dict[str, int], dry_run: bool
) -> None:
    print(f"\n{TAG} Processing opportunity: {event.title} ({event.id})")

    try:
        signups = fetch_signups_for_event(supabase, event.id)
    except QueryError as e:
        print(f"  ⚠️  {e}")
        return

    if not signups:
        print("  No signups, nothing to send")
        return

    hours = rounded_hours(estimated_duration(event.start_time, event.end_time)) if event.start_time else 0

    for signup in signups:
        if not signup.email:
            print(f"  ✗ Missing email for signup {signup.name or signup.user_id or '?'}")
            stats["failed"] += 1
            continue

        if dry_run:
            print(f"  [DRY RUN] Would send reminder to {signup.email}")
            stats["sent"] += 1
            continue

        try:
            result = send_reminder_email(signup, event, hours)
        except Exception as e:
            result = {"success": False, "error": str(e)}

        if result["success"]:
            print(f"  ✓ Sent reminder to {signup.email}")
            stats["sent"] += 1
        else:
            error_msg = result.get("error", "Unknown error")
            print(f"  ✗ Failed to send reminder to {signup.email}: {error_msg}")
            stats["failed"] += 1
            log_notification_error(
                error_type="reminder",
                error_message=error_msg,
                context={"event_id": event.id, "recipient": signup.email},
            )
