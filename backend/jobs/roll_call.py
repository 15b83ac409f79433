"""
Roll-call notices: ask an organizer to take attendance ~5 minutes before start.

The cron invoker runs every few minutes but not on a precise clock, so the
job queries a wide buffer (2-12 minutes ahead) and then re-checks each
candidate against the real send window (2-9 minutes ahead). Items outside
the send window are left untouched for a later run. The
`rollcall_email_sent_at` marker is written only after the email was
accepted, and the buffer query excludes marked rows, so a notice goes out
at most once per occurrence as long as runs do not overlap.

Usage:
    uv run python -m jobs.roll_call
    uv run python -m jobs.roll_call --dry-run
"""

import argparse
from datetime import datetime
from typing import Any, Optional

from config.settings import (
    CRON_AUTH_TOKEN,
    ROLL_CALL_BUFFER_END,
    ROLL_CALL_BUFFER_START,
    ROLL_CALL_SEND_WINDOW_END,
    ROLL_CALL_SEND_WINDOW_START,
)
from jobs.errors import QueryError
from jobs.markers import is_notified, mark_notified
from jobs.queries import (
    fetch_organization,
    fetch_roll_call_candidates,
    fetch_signups_for_event,
)
from jobs.windows import estimated_duration, lead_time, rounded_hours, select_due, window_from
from models import Event, JobResult, JobType
from notifications.email_sender import send_roll_call_email
from notifications.error_logger import log_notification_error
from shared.db import get_supabase_client
from shared.utils import utc_now

TAG = "[Roll Call]"


def send_roll_call_emails(
    supabase: Any = None, now: Optional[datetime] = None, dry_run: bool = False
) -> JobResult:
    """
    Send one roll-call notice per opportunity starting in ~5 minutes.

    Args:
        supabase: Service-role client (created from the environment if omitted)
        now: Reference time for both windows (defaults to current UTC time)
        dry_run: If True, don't send emails or write markers

    Returns:
        JobResult with emails_sent / emails_failed
    """
    now = now or utc_now()
    supabase = supabase or get_supabase_client()
    buffer = window_from(now, ROLL_CALL_BUFFER_START, ROLL_CALL_BUFFER_END)

    print(f"{TAG} Looking for opportunities starting between {buffer.start.isoformat()} and {buffer.end.isoformat()}")

    try:
        candidates = fetch_roll_call_candidates(supabase, buffer)
    except QueryError as e:
        print(f"✗ {TAG} {e}")
        return JobResult.failure(str(e), emails_sent=0)

    if not candidates:
        print(f"{TAG} No opportunities starting in buffer window.")
        return JobResult(success=True, message="No opportunities starting soon.", emails_sent=0, emails_failed=0)

    # Same conditions as the store filter, checked on the parsed rows
    candidates = [event for event in candidates if event.is_open and not is_notified(event)]

    due, deferred = select_due(
        candidates,
        now,
        ROLL_CALL_SEND_WINDOW_START,
        ROLL_CALL_SEND_WINDOW_END,
        start_of=lambda event: event.start_time,
    )

    for event in deferred:
        lead = lead_time(event.start_time, now) if event.start_time else None
        print(f"{TAG} Skipping {event.title} ({event.id}) lead={lead} not within send window")

    stats = {"sent": 0, "failed": 0}

    for event in due:
        try:
            if _send_roll_call(supabase, event, now, dry_run):
                stats["sent"] += 1
            else:
                stats["failed"] += 1
        except Exception as e:
            print(f"  ✗ {TAG} Failed to process roll call for {event.title} ({event.id}): {e}")
            stats["failed"] += 1
            log_notification_error(
                error_type="roll_call",
                error_message=str(e),
                context={"event_id": event.id, "event_title": event.title},
            )

    print(f"{TAG} Sent: {stats['sent']}, Failed: {stats['failed']}")
    return JobResult(success=True, emails_sent=stats["sent"], emails_failed=stats["failed"])


def _send_roll_call(supabase: Any, event: Event, now: datetime, dry_run: bool) -> bool:
    """
    Send the notice for one due opportunity and mark it.

    Returns:
        True if the notice was sent, False if the item was skipped as failed.
        An organization without a contact email is skipped without a marker;
        once the start time passes the opportunity drops out of the query.
    """
    print(f"\n{TAG} Processing opportunity: {event.title} ({event.id})")

    signup_count = len(fetch_signups_for_event(supabase, event.id))

    organization = fetch_organization(supabase, event.owner_org_id)
    if organization is None:
        print(f"  ✗ Organization {event.owner_org_id} not found")
        return False

    if not organization.contact_email:
        print(f"  ✗ No contact email found for organization: {organization.name}")
        return False

    hours = rounded_hours(estimated_duration(event.start_time, event.end_time))

    if dry_run:
        print(f"  [DRY RUN] Would send roll call to {organization.contact_email} ({signup_count} signups)")
        return True

    result = send_roll_call_email(organization.contact_email, event, signup_count, hours)

    if not result["success"]:
        error_msg = result.get("error", "Unknown error")
        print(f"  ✗ Failed to send roll call to {organization.contact_email}: {error_msg}")
        log_notification_error(
            error_type="roll_call",
            error_message=error_msg,
            context={
                "event_id": event.id,
                "organization_id": organization.id,
                "recipient": organization.contact_email,
            },
        )
        return False

    try:
        mark_notified(supabase, event.id, now)
    except Exception as e:
        # The email went out; without the marker a later run may send it again
        print(f"  ⚠️  Failed to mark roll call as sent for {event.id}: {e}")
        log_notification_error(
            error_type="roll_call_marker",
            error_message=str(e),
            context={"event_id": event.id, "email_id": result.get("email_id")},
        )

    print(f"  ✓ Roll call email sent to {organization.contact_email}")
    return True


def main() -> None:
    """Dedicated cron entry point for the roll-call job."""
    from jobs.run_job import invoke

    parser = argparse.ArgumentParser(description="Send roll-call emails for opportunities starting soon")
    parser.add_argument("--token", type=str, default=CRON_AUTH_TOKEN, help="Cron secret (defaults to CRON_AUTH_TOKEN)")
    parser.add_argument("--dry-run", action="store_true", help="Dry run mode (don't send emails or write markers)")
    args = parser.parse_args()

    raise SystemExit(invoke(JobType.ROLL_CALL_EMAILS.value, args.token, dry_run=args.dry_run))


if __name__ == "__main__":
    main()
