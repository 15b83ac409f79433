from datetime import datetime, timezone
from typing import Any
from dateutil import parser as date_parser


def parse_timestamp(value: Any) -> datetime | None:
    """Parse a store timestamp into an aware UTC datetime (naive values are UTC)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        try:
            dt = date_parser.isoparse(str(value))
        except (ValueError, OverflowError, TypeError):
            try:
                dt = date_parser.parse(str(value))
            except (ValueError, OverflowError, TypeError):
                return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_iso(dt: datetime) -> str:
    """Format a datetime the way PostgREST filters expect it (UTC, ISO 8601)."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def print_summary(job: str, stats: dict[str, int]) -> None:
    """Print job summary."""
    print(f"\n{'=' * 60}")
    print(f"[{utc_now()}] {job} Complete")
    print(f"{'=' * 60}")
    for key, value in stats.items():
        print(f"{key + ':':<14}{value}")
    print(f"{'=' * 60}\n")
