"""
Time window arithmetic shared by the scheduled jobs.

All datetimes are timezone-aware UTC. Query windows are built relative to
the run's `now`, and the per-item checks use the same `now` so one run sees
a single consistent clock.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterable, List, Optional, Tuple, TypeVar

from config.settings import DEFAULT_EVENT_DURATION

T = TypeVar("T")


@dataclass(frozen=True)
class TimeWindow:
    start: datetime
    end: datetime
    # Day windows are half-open [start, end); lead windows include both ends
    end_inclusive: bool = True

    def contains(self, moment: datetime) -> bool:
        if moment < self.start:
            return False
        return moment <= self.end if self.end_inclusive else moment < self.end


def window_from(now: datetime, min_lead: timedelta, max_lead: timedelta) -> TimeWindow:
    """Window of start times between `min_lead` and `max_lead` from now, inclusive."""
    return TimeWindow(start=now + min_lead, end=now + max_lead)


def utc_day_bounds(now: datetime) -> TimeWindow:
    """[today 00:00:00 UTC, tomorrow 00:00:00 UTC) for the UTC day containing `now`."""
    today = now.astimezone(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)
    return TimeWindow(start=today, end=today + timedelta(days=1), end_inclusive=False)


def lead_time(start_time: datetime, now: datetime) -> timedelta:
    return start_time - now


def estimated_duration(
    start_time: Optional[datetime],
    end_time: Optional[datetime],
    duration_hours: Optional[float] = None,
) -> timedelta:
    """
    Length of one occurrence.

    end - start when both are known, otherwise `duration_hours`, otherwise
    the two hour default.
    """
    if start_time and end_time:
        return end_time - start_time
    if duration_hours:
        return timedelta(hours=duration_hours)
    return DEFAULT_EVENT_DURATION


def rounded_hours(duration: timedelta) -> float:
    """Duration in hours rounded to one decimal, as shown in emails."""
    return round(duration.total_seconds() / 3600, 1)


def select_due(
    candidates: Iterable[T],
    now: datetime,
    min_lead: timedelta,
    max_lead: timedelta,
    start_of: Callable[[T], Optional[datetime]],
) -> Tuple[List[T], List[T]]:
    """
    Re-check candidates from a wide buffer query against the exact send window.

    The buffer query overshoots so that an invoker running late or early
    still sees the item; only items whose lead time is inside
    [min_lead, max_lead] are due now. Deferred items keep their marker unset
    and are picked up by a later run.

    Returns:
        (due, deferred)
    """
    due: List[T] = []
    deferred: List[T] = []
    for candidate in candidates:
        start_time = start_of(candidate)
        if start_time is None:
            deferred.append(candidate)
            continue
        lead = lead_time(start_time, now)
        if min_lead <= lead <= max_lead:
            due.append(candidate)
        else:
            deferred.append(candidate)
    return due, deferred
