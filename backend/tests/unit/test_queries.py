"""
Unit tests for jobs/queries.py and jobs/markers.py

Checks the filters sent to the query builder and how rows and failures
come back.
"""

import unittest
from datetime import datetime, timedelta, timezone

from jobs.errors import QueryError
from jobs.markers import cleared_marker, is_notified, mark_notified
from jobs.queries import (
    fetch_digest_organizations,
    fetch_events_starting_between,
    fetch_finished_recurring_events,
    fetch_organization,
    fetch_roll_call_candidates,
    fetch_signups_created_between,
    reschedule_event,
)
from jobs.windows import TimeWindow, utc_day_bounds, window_from
from models import Event
from tests.fixtures.event_factory import create_test_event
from tests.fixtures.mock_helpers import create_mock_supabase
from tests.fixtures.org_factory import create_test_organization

NOW = datetime(2024, 1, 10, 9, 0, tzinfo=timezone.utc)


class TestEventQueries(unittest.TestCase):
    """Tests for opportunity queries."""

    def test_events_starting_between_filters_on_start_time(self):
        supabase = create_mock_supabase([create_test_event(event_id="event_1")])
        window = window_from(NOW, timedelta(hours=23), timedelta(hours=24))

        events = fetch_events_starting_between(supabase, window)

        self.assertEqual([e.id for e in events], ["event_1"])
        supabase.table.assert_called_with("opportunities")
        supabase.gte.assert_called_with("start_time", "2024-01-11T08:00:00+00:00")
        supabase.lte.assert_called_with("start_time", "2024-01-11T09:00:00+00:00")
        supabase.or_.assert_not_called()

    def test_roll_call_candidates_exclude_closed_and_marked(self):
        supabase = create_mock_supabase([])

        fetch_roll_call_candidates(supabase, window_from(NOW, timedelta(minutes=2), timedelta(minutes=12)))

        supabase.or_.assert_called_with("closed.is.null,closed.eq.false")
        supabase.is_.assert_called_with("rollcall_email_sent_at", "null")

    def test_finished_recurring_events(self):
        supabase = create_mock_supabase([])

        fetch_finished_recurring_events(supabase, NOW)

        supabase.in_.assert_called_with("frequency", ["daily", "weekly", "monthly"])
        supabase.lte.assert_called_with("end_time", "2024-01-10T09:00:00+00:00")

    def test_execute_failure_raises_query_error(self):
        supabase = create_mock_supabase()
        supabase.execute.side_effect = Exception("connection reset")

        with self.assertRaises(QueryError) as ctx:
            fetch_events_starting_between(supabase, TimeWindow(NOW, NOW))
        self.assertIn("connection reset", str(ctx.exception))

    def test_malformed_rows_are_skipped(self):
        supabase = create_mock_supabase([{"title": "missing id"}, create_test_event(event_id="ok")])

        events = fetch_events_starting_between(supabase, TimeWindow(NOW, NOW))

        self.assertEqual([e.id for e in events], ["ok"])

    def test_reschedule_clears_marker(self):
        supabase = create_mock_supabase()
        start = NOW + timedelta(days=1)

        reschedule_event(supabase, "event_1", start, start + timedelta(hours=2))

        supabase.update.assert_called_once_with(
            {
                "start_time": "2024-01-11T09:00:00+00:00",
                "end_time": "2024-01-11T11:00:00+00:00",
                "rollcall_email_sent_at": None,
            }
        )
        supabase.eq.assert_called_with("id", "event_1")


class TestOwnerQueries(unittest.TestCase):
    """Tests for signup, organization and project queries."""

    def test_signups_created_between_uses_half_open_day(self):
        supabase = create_mock_supabase([])

        fetch_signups_created_between(supabase, ["e1", "e2"], utc_day_bounds(NOW))

        supabase.in_.assert_called_with("opportunity_id", ["e1", "e2"])
        supabase.gte.assert_called_with("created_at", "2024-01-10T00:00:00+00:00")
        supabase.lt.assert_called_with("created_at", "2024-01-11T00:00:00+00:00")

    def test_signups_for_no_events_skips_query(self):
        supabase = create_mock_supabase([])

        self.assertEqual(fetch_signups_created_between(supabase, [], utc_day_bounds(NOW)), [])
        supabase.table.assert_not_called()

    def test_fetch_organization_not_found(self):
        supabase = create_mock_supabase([])
        self.assertIsNone(fetch_organization(supabase, "org_404"))

    def test_fetch_organization_without_id(self):
        supabase = create_mock_supabase([])
        self.assertIsNone(fetch_organization(supabase, None))
        supabase.table.assert_not_called()

    def test_digest_organizations_drop_blank_emails(self):
        supabase = create_mock_supabase(
            [
                create_test_organization(org_id="org_1", reach_out_email="hello@a.org"),
                create_test_organization(org_id="org_2", reach_out_email="   "),
            ]
        )

        organizations = fetch_digest_organizations(supabase)

        self.assertEqual([o.id for o in organizations], ["org_1"])
        supabase.neq.assert_called_with("reach_out_email", "")


class TestMarkers(unittest.TestCase):
    """Tests for the roll-call marker helpers."""

    def test_is_notified(self):
        marked = Event.model_validate(create_test_event(rollcall_email_sent_at=NOW))
        unmarked = Event.model_validate(create_test_event())

        self.assertTrue(is_notified(marked))
        self.assertFalse(is_notified(unmarked))

    def test_mark_notified_writes_timestamp(self):
        supabase = create_mock_supabase()

        mark_notified(supabase, "event_1", NOW)

        supabase.update.assert_called_once_with({"rollcall_email_sent_at": "2024-01-10T09:00:00+00:00"})
        supabase.eq.assert_called_with("id", "event_1")
        supabase.execute.assert_called_once()

    def test_cleared_marker(self):
        self.assertEqual(cleared_marker(), {"rollcall_email_sent_at": None})


if __name__ == "__main__":
    unittest.main()
