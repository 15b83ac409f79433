"""
Daily signup digests.

Two variants share the same shape: one summary email per owner covering
the signups created during the current UTC day, [00:00:00Z, +24h). The UTC
boundary is used regardless of the server's timezone. Owners with no
signups today get nothing. Each owner is processed independently.
"""

from datetime import datetime
from typing import Any, Optional

from jobs.errors import QueryError
from jobs.queries import (
    fetch_digest_organizations,
    fetch_organization_events,
    fetch_project_signups_created_between,
    fetch_projects,
    fetch_signups_created_between,
)
from jobs.windows import TimeWindow, utc_day_bounds
from models import JobResult, Organization, Project
from notifications.email_sender import send_organization_digest, send_project_digest
from notifications.error_logger import log_notification_error
from notifications.identity import IdentityLookupError, get_user_email
from shared.db import get_supabase_client
from shared.utils import utc_now

ORG_TAG = "[Daily Digest]"
PROJECT_TAG = "[Senior Project Daily Digest]"

SENT = "sent"
SKIPPED = "skipped"
FAILED = "failed"


def send_daily_digest_emails(
    supabase: Any = None, now: Optional[datetime] = None, dry_run: bool = False
) -> JobResult:
    """
    Send each organization with a reach-out email a digest of today's signups.

    Args:
        supabase: Service-role client (created from the environment if omitted)
        now: Any moment in the UTC day to summarize (defaults to current UTC time)
        dry_run: If True, don't actually send emails

    Returns:
        JobResult with emails_sent / emails_failed
    """
    now = now or utc_now()
    supabase = supabase or get_supabase_client()
    day = utc_day_bounds(now)

    print(f"{ORG_TAG} Starting daily digest for {day.start.date().isoformat()} (UTC)")

    try:
        organizations = fetch_digest_organizations(supabase)
    except QueryError as e:
        print(f"✗ {ORG_TAG} {e}")
        return JobResult.failure(str(e), emails_sent=0)

    if not organizations:
        print(f"{ORG_TAG} No organizations with reach-out emails found")
        return JobResult(
            success=True,
            message="No organizations with reach-out emails found",
            emails_sent=0,
            emails_failed=0,
        )

    stats = {SENT: 0, FAILED: 0, SKIPPED: 0}

    for organization in organizations:
        try:
            outcome = _send_organization_digest(supabase, organization, day, dry_run)
        except Exception as e:
            print(f"  ✗ {ORG_TAG} Failed to send daily digest for organization {organization.id}: {e}")
            log_notification_error(
                error_type="digest",
                error_message=str(e),
                context={"organization_id": organization.id, "day": day.start.date().isoformat()},
            )
            outcome = FAILED
        stats[outcome] += 1

    print(f"{ORG_TAG} Sent: {stats[SENT]}, Failed: {stats[FAILED]}, Skipped: {stats[SKIPPED]}")
    return JobResult(success=True, emails_sent=stats[SENT], emails_failed=stats[FAILED])


def _send_organization_digest(
    supabase: Any, organization: Organization, day: TimeWindow, dry_run: bool
) -> str:
    events = fetch_organization_events(supabase, organization.id)
    if not events:
        print(f"{ORG_TAG} No opportunities found for org {organization.id}")
        return SKIPPED

    event_titles = {event.id: event.title for event in events}
    signups = fetch_signups_created_between(supabase, list(event_titles), day)

    if not signups:
        print(f"{ORG_TAG} No signups today for org {organization.id}")
        return SKIPPED

    print(f"\n{ORG_TAG} Processing {organization.name}: {len(signups)} signups today")

    if dry_run:
        print(f"  [DRY RUN] Would send digest to {organization.reach_out_email}")
        return SENT

    result = send_organization_digest(organization, signups, event_titles)

    if not result["success"]:
        error_msg = result.get("error", "Unknown error")
        print(f"  ✗ Failed to send digest to {organization.reach_out_email}: {error_msg}")
        log_notification_error(
            error_type="digest",
            error_message=error_msg,
            context={
                "organization_id": organization.id,
                "recipient": organization.reach_out_email,
                "signup_count": len(signups),
            },
        )
        return FAILED

    print(f"  ✓ Daily digest sent to {organization.reach_out_email} ({len(signups)} signups)")
    return SENT


def send_senior_project_digest_emails(
    supabase: Any = None, now: Optional[datetime] = None, dry_run: bool = False
) -> JobResult:
    """
    Send each senior project owner a digest of today's signups.

    Args:
        supabase: Service-role client (created from the environment if omitted)
        now: Any moment in the UTC day to summarize (defaults to current UTC time)
        dry_run: If True, don't actually send emails

    Returns:
        JobResult with emails_sent / emails_failed
    """
    now = now or utc_now()
    supabase = supabase or get_supabase_client()
    day = utc_day_bounds(now)

    print(f"{PROJECT_TAG} Starting senior project digest for {day.start.date().isoformat()} (UTC)")

    try:
        projects = fetch_projects(supabase)
    except QueryError as e:
        print(f"✗ {PROJECT_TAG} {e}")
        return JobResult.failure(str(e), emails_sent=0)

    if not projects:
        print(f"{PROJECT_TAG} No senior projects found")
        return JobResult(success=True, message="No senior projects found", emails_sent=0, emails_failed=0)

    stats = {SENT: 0, FAILED: 0, SKIPPED: 0}

    for project in projects:
        try:
            outcome = _send_project_digest(supabase, project, day, dry_run)
        except Exception as e:
            print(f"  ✗ {PROJECT_TAG} Failed to send daily digest for project {project.id}: {e}")
            log_notification_error(
                error_type="senior_project_digest",
                error_message=str(e),
                context={"project_id": project.id, "day": day.start.date().isoformat()},
            )
            outcome = FAILED
        stats[outcome] += 1

    print(f"{PROJECT_TAG} Sent: {stats[SENT]}, Failed: {stats[FAILED]}, Skipped: {stats[SKIPPED]}")
    return JobResult(success=True, emails_sent=stats[SENT], emails_failed=stats[FAILED])


def _send_project_digest(
    supabase: Any, project: Project, day: TimeWindow, dry_run: bool
) -> str:
    signups = fetch_project_signups_created_between(supabase, project.id, day)

    if not signups:
        print(f"{PROJECT_TAG} No signups today for project: {project.title}")
        return SKIPPED

    try:
        owner_email = get_user_email(supabase, project.owner_user_id)
    except IdentityLookupError as e:
        print(f"  ✗ {PROJECT_TAG} Error fetching owner email for project {project.id}: {e}")
        return FAILED

    print(f"\n{PROJECT_TAG} Processing {project.title}: {len(signups)} signups today")

    if dry_run:
        print(f"  [DRY RUN] Would send digest to {owner_email}")
        return SENT

    result = send_project_digest(owner_email, project, signups)

    if not result["success"]:
        error_msg = result.get("error", "Unknown error")
        print(f"  ✗ Failed to send digest to {owner_email}: {error_msg}")
        log_notification_error(
            error_type="senior_project_digest",
            error_message=error_msg,
            context={"project_id": project.id, "recipient": owner_email, "signup_count": len(signups)},
        )
        return FAILED

    print(f"  ✓ Daily digest sent to {owner_email} for project {project.title} ({len(signups)} signups)")
    return SENT
