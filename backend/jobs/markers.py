"""
Per-occurrence "already notified" markers.

The roll-call marker lives in `opportunities.rollcall_email_sent_at`. It is
the only record that a notice went out: set after a confirmed send,
cleared when the opportunity moves to its next occurrence.
"""

from datetime import datetime
from typing import Any, Dict

from models import Event
from shared.utils import to_iso

ROLL_CALL_MARKER_COLUMN = "rollcall_email_sent_at"


def is_notified(event: Event) -> bool:
    return event.notified_at is not None


def mark_notified(supabase: Any, event_id: str, at: datetime) -> None:
    """Record that the current occurrence's roll call was sent. Call only after the send succeeded."""
    supabase.table("opportunities").update(
        {ROLL_CALL_MARKER_COLUMN: to_iso(at)}
    ).eq("id", event_id).execute()


def cleared_marker() -> Dict[str, None]:
    """Update fragment that resets the marker for a new occurrence."""
    return {ROLL_CALL_MARKER_COLUMN: None}
