"""
Store queries used by the scheduled jobs.

Every query goes through `_execute`, which turns client/PostgREST failures
into QueryError. Rows are validated into models; a malformed row is
reported and dropped rather than failing the whole batch.
"""

from datetime import datetime
from typing import Any, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from config.settings import RECURRING_FREQUENCIES
from jobs.errors import QueryError
from jobs.markers import ROLL_CALL_MARKER_COLUMN, cleared_marker
from jobs.windows import TimeWindow
from models import Event, Organization, Project, ProjectSignup, Signup
from shared.utils import to_iso

M = TypeVar("M", bound=BaseModel)

EVENT_COLUMNS = (
    "id, title, start_time, end_time, duration_hours, frequency, closed, "
    f"location, org_id, {ROLL_CALL_MARKER_COLUMN}"
)
SIGNUP_COLUMNS = "user_id, name, email, phone, institute, opportunity_id, created_at"
OPEN_EVENTS_FILTER = "closed.is.null,closed.eq.false"


def _execute(query: Any, description: str) -> Any:
    try:
        return query.execute()
    except Exception as e:
        raise QueryError(f"Error fetching {description}: {e}") from e


def _parse_rows(rows: Optional[List[dict]], model: Type[M]) -> List[M]:
    parsed: List[M] = []
    for row in rows or []:
        try:
            parsed.append(model.model_validate(row))
        except ValidationError as e:
            print(f"  ⚠️  Skipping malformed {model.__name__} row {row.get('id', '?')}: {e}")
    return parsed


# Opportunities


def fetch_events_starting_between(supabase: Any, window: TimeWindow) -> List[Event]:
    """Opportunities starting inside the window, open or closed."""
    response = _execute(
        supabase.table("opportunities")
        .select(EVENT_COLUMNS)
        .gte("start_time", to_iso(window.start))
        .lte("start_time", to_iso(window.end)),
        "opportunities",
    )
    return _parse_rows(response.data, Event)


def fetch_roll_call_candidates(supabase: Any, window: TimeWindow) -> List[Event]:
    """Open opportunities starting inside the window that have not had a roll call sent."""
    response = _execute(
        supabase.table("opportunities")
        .select(EVENT_COLUMNS)
        .gte("start_time", to_iso(window.start))
        .lte("start_time", to_iso(window.end))
        .or_(OPEN_EVENTS_FILTER)
        .is_(ROLL_CALL_MARKER_COLUMN, "null"),
        "opportunities",
    )
    return _parse_rows(response.data, Event)


def fetch_finished_recurring_events(supabase: Any, now: datetime) -> List[Event]:
    """Open recurring opportunities whose current occurrence has ended."""
    response = _execute(
        supabase.table("opportunities")
        .select(EVENT_COLUMNS)
        .or_(OPEN_EVENTS_FILTER)
        .in_("frequency", RECURRING_FREQUENCIES)
        .lte("end_time", to_iso(now)),
        "recurring opportunities",
    )
    return _parse_rows(response.data, Event)


def fetch_organization_events(supabase: Any, organization_id: str) -> List[Event]:
    response = _execute(
        supabase.table("opportunities").select("id, title").eq("org_id", organization_id),
        f"opportunities for organization {organization_id}",
    )
    return _parse_rows(response.data, Event)


def reschedule_event(
    supabase: Any, event_id: str, start_time: datetime, end_time: datetime
) -> None:
    """Move an opportunity to its next occurrence and reset its roll-call marker."""
    _execute(
        supabase.table("opportunities")
        .update(
            {
                "start_time": to_iso(start_time),
                "end_time": to_iso(end_time),
                **cleared_marker(),
            }
        )
        .eq("id", event_id),
        f"update of opportunity {event_id}",
    )


# Signups


def fetch_signups_for_event(supabase: Any, event_id: str) -> List[Signup]:
    response = _execute(
        supabase.table("signups").select(SIGNUP_COLUMNS).eq("opportunity_id", event_id),
        f"signups for opportunity {event_id}",
    )
    return _parse_rows(response.data, Signup)


def fetch_signups_created_between(
    supabase: Any, event_ids: List[str], window: TimeWindow
) -> List[Signup]:
    """Signups for any of the given opportunities created inside [start, end)."""
    if not event_ids:
        return []
    response = _execute(
        supabase.table("signups")
        .select(SIGNUP_COLUMNS)
        .in_("opportunity_id", event_ids)
        .gte("created_at", to_iso(window.start))
        .lt("created_at", to_iso(window.end)),
        "signups",
    )
    return _parse_rows(response.data, Signup)


# Organizations and senior projects


def fetch_organization(supabase: Any, organization_id: Optional[str]) -> Optional[Organization]:
    if not organization_id:
        return None
    response = _execute(
        supabase.table("organizations")
        .select("id, name, owner, contact_email, reach_out_email")
        .eq("id", organization_id)
        .limit(1),
        f"organization {organization_id}",
    )
    organizations = _parse_rows(response.data, Organization)
    return organizations[0] if organizations else None


def fetch_digest_organizations(supabase: Any) -> List[Organization]:
    """Organizations with a non-empty reach-out email."""
    response = _execute(
        supabase.table("organizations")
        .select("id, name, owner, contact_email, reach_out_email")
        .not_.is_("reach_out_email", "null")
        .neq("reach_out_email", ""),
        "organizations",
    )
    return [org for org in _parse_rows(response.data, Organization) if org.reach_out_email]


def fetch_projects(supabase: Any) -> List[Project]:
    response = _execute(
        supabase.table("senior_projects").select("id, title, user_id"),
        "senior projects",
    )
    return _parse_rows(response.data, Project)


def fetch_project_signups_created_between(
    supabase: Any, project_id: str, window: TimeWindow
) -> List[ProjectSignup]:
    response = _execute(
        supabase.table("senior_project_signups")
        .select("name, email, project_id, created_at")
        .eq("project_id", project_id)
        .gte("created_at", to_iso(window.start))
        .lt("created_at", to_iso(window.end)),
        f"signups for senior project {project_id}",
    )
    return _parse_rows(response.data, ProjectSignup)
