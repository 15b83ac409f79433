"""
Roll recurring opportunities forward so only one occurrence exists at a time.

When a daily/weekly/monthly opportunity's current occurrence has ended, its
start and end times move forward by whole periods until the end is in the
future. A run that was missed for several periods jumps straight to the
next upcoming occurrence. Moving an occurrence also clears its roll-call
marker so the new occurrence gets its own notice.
"""

from datetime import datetime, timedelta
from typing import Any, Dict, Optional, Tuple

from dateutil.relativedelta import relativedelta

from jobs.errors import QueryError
from jobs.queries import fetch_finished_recurring_events, reschedule_event
from jobs.windows import estimated_duration
from models import Event, JobResult
from models.types import RecurringFrequency
from notifications.error_logger import log_notification_error
from shared.db import get_supabase_client
from shared.utils import utc_now

TAG = "[Roll Forward]"

PERIODS: Dict[RecurringFrequency, relativedelta] = {
    "daily": relativedelta(days=1),
    "weekly": relativedelta(weeks=1),
    "monthly": relativedelta(months=1),
}


def occurrence_duration(event: Event) -> timedelta:
    return estimated_duration(event.start_time, event.end_time, event.duration_hours)


def next_occurrence(
    start_time: datetime, duration: timedelta, frequency: RecurringFrequency, now: datetime
) -> Tuple[datetime, datetime]:
    """
    First occurrence after `start_time` whose end is after `now`.

    Steps are taken from the original start (start + k periods) so monthly
    series anchored on the 31st land on each month's last day instead of
    drifting earlier after February.

    Raises:
        ValueError: If the frequency is not recurring
    """
    step = PERIODS.get(frequency)
    if step is None:
        raise ValueError(f"Not a recurring frequency: {frequency!r}")

    periods = 1
    while True:
        next_start = start_time + step * periods
        next_end = next_start + duration
        if next_end > now:
            return next_start, next_end
        periods += 1


def roll_forward_opportunities(
    supabase: Any = None, now: Optional[datetime] = None, dry_run: bool = False
) -> JobResult:
    """
    Advance every open recurring opportunity whose occurrence has ended.

    Args:
        supabase: Service-role client (created from the environment if omitted)
        now: Reference time (defaults to current UTC time)
        dry_run: If True, compute the new times without writing them

    Returns:
        JobResult with `updated`, the number of opportunities moved
    """
    now = now or utc_now()
    supabase = supabase or get_supabase_client()

    try:
        events = fetch_finished_recurring_events(supabase, now)
    except QueryError as e:
        print(f"✗ {TAG} {e}")
        return JobResult.failure(str(e), updated=0)

    if not events:
        print(f"{TAG} No recurring opportunities to roll forward.")
        return JobResult(success=True, updated=0)

    updated = 0

    for event in events:
        try:
            if not event.is_recurring:
                print(f"  {TAG} Skipping {event.title} ({event.id}): frequency {event.frequency!r} does not recur")
                continue

            duration = occurrence_duration(event)
            start_time = event.start_time or (event.end_time - duration)
            next_start, next_end = next_occurrence(start_time, duration, event.frequency, now)

            if dry_run:
                print(f"  [DRY RUN] Would move {event.title} ({event.id}) to {next_start.isoformat()}")
                updated += 1
                continue

            reschedule_event(supabase, event.id, next_start, next_end)
            updated += 1
            print(f"  ✓ {event.title} ({event.id}) moved to {next_start.isoformat()}")
        except Exception as e:
            # Already-moved opportunities in this run stay moved
            print(f"  ✗ {TAG} Failed to update opportunity {event.id}: {e}")
            log_notification_error(
                error_type="roll_forward",
                error_message=str(e),
                context={"event_id": event.id, "frequency": event.frequency},
            )

    print(f"{TAG} Updated {updated} opportunities")
    return JobResult(success=True, updated=updated)
