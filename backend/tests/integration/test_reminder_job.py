"""
Integration tests for the reminder job against an in-memory store.
"""

import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from jobs.reminders import send_reminder_emails
from tests.fixtures.event_factory import create_test_event, create_test_signup
from tests.fixtures.fake_supabase import FakeSupabase
from tests.fixtures.mock_helpers import create_send_result

NOW = datetime(2024, 1, 10, 9, 0, tzinfo=timezone.utc)


def _store(events, signups):
    return FakeSupabase({"opportunities": events, "signups": signups})


@patch("jobs.reminders.send_reminder_email")
class TestReminderJob(unittest.TestCase):
    """Tests for send_reminder_emails()."""

    def test_no_events(self, mock_send):
        result = send_reminder_emails(supabase=_store([], []), now=NOW)

        self.assertEqual(
            result.to_response(),
            {"success": True, "emailsSent": 0, "emailsFailed": 0, "message": "No upcoming opportunities."},
        )
        mock_send.assert_not_called()

    def test_event_without_signups_sends_nothing(self, mock_send):
        event = create_test_event(event_id="e1", start_time=NOW + timedelta(hours=23, minutes=30))

        result = send_reminder_emails(supabase=_store([event], []), now=NOW)

        self.assertTrue(result.success)
        self.assertEqual((result.emails_sent, result.emails_failed), (0, 0))
        mock_send.assert_not_called()

    def test_sends_one_reminder_per_signup(self, mock_send):
        mock_send.return_value = create_send_result()
        event = create_test_event(event_id="e1", start_time=NOW + timedelta(hours=23, minutes=30))
        signups = [
            create_test_signup("e1", email="a@example.com"),
            create_test_signup("e1", email="b@example.com"),
            create_test_signup("other", email="c@example.com"),
        ]

        result = send_reminder_emails(supabase=_store([event], signups), now=NOW)

        self.assertEqual((result.emails_sent, result.emails_failed), (2, 0))
        recipients = [call.args[0].email for call in mock_send.call_args_list]
        self.assertEqual(recipients, ["a@example.com", "b@example.com"])
        self.assertEqual(mock_send.call_args.args[2], 2.0)

    def test_window_edges(self, mock_send):
        """Starts at exactly +23h and +24h are included, +22h59m and +24h01m are not."""
        mock_send.return_value = create_send_result()
        events = [
            create_test_event(event_id="early", start_time=NOW + timedelta(hours=22, minutes=59)),
            create_test_event(event_id="low", start_time=NOW + timedelta(hours=23)),
            create_test_event(event_id="high", start_time=NOW + timedelta(hours=24)),
            create_test_event(event_id="late", start_time=NOW + timedelta(hours=24, minutes=1)),
        ]
        signups = [create_test_signup(event["id"]) for event in events]

        send_reminder_emails(supabase=_store(events, signups), now=NOW)

        reminded = [call.args[1].id for call in mock_send.call_args_list]
        self.assertEqual(reminded, ["low", "high"])

    def test_closed_events_still_remind(self, mock_send):
        mock_send.return_value = create_send_result()
        event = create_test_event(event_id="e1", start_time=NOW + timedelta(hours=23, minutes=30), closed=True)

        result = send_reminder_emails(supabase=_store([event], [create_test_signup("e1")]), now=NOW)

        self.assertEqual(result.emails_sent, 1)

    def test_missing_email_counts_as_failed_without_sending(self, mock_send):
        mock_send.return_value = create_send_result()
        event = create_test_event(event_id="e1", start_time=NOW + timedelta(hours=23, minutes=30))
        signups = [create_test_signup("e1", email=""), create_test_signup("e1", email=None)]

        result = send_reminder_emails(supabase=_store([event], signups), now=NOW)

        self.assertEqual((result.emails_sent, result.emails_failed), (0, 2))
        mock_send.assert_not_called()

    def test_one_failed_send_does_not_stop_the_batch(self, mock_send):
        """The second of five sends fails; the rest still go out."""
        mock_send.side_effect = [
            create_send_result(),
            create_send_result(success=False),
            create_send_result(),
            Exception("socket closed"),
            create_send_result(),
        ]
        event = create_test_event(event_id="e1", start_time=NOW + timedelta(hours=23, minutes=30))
        signups = [create_test_signup("e1", email=f"v{i}@example.com") for i in range(5)]

        result = send_reminder_emails(supabase=_store([event], signups), now=NOW)

        self.assertTrue(result.success)
        self.assertEqual((result.emails_sent, result.emails_failed), (3, 2))
        self.assertEqual(mock_send.call_count, 5)

    def test_signup_query_failure_skips_only_that_event(self, mock_send):
        mock_send.return_value = create_send_result()
        events = [
            create_test_event(event_id="e1", start_time=NOW + timedelta(hours=23, minutes=10)),
            create_test_event(event_id="e2", start_time=NOW + timedelta(hours=23, minutes=20)),
        ]
        store = _store(events, [create_test_signup("e2")])

        with patch("jobs.reminders.fetch_signups_for_event", side_effect=[RuntimeError("timeout"), []]):
            result = send_reminder_emails(supabase=store, now=NOW)

        self.assertTrue(result.success)
        self.assertEqual((result.emails_sent, result.emails_failed), (0, 0))

    def test_event_query_failure(self, mock_send):
        store = _store([], [])
        store.fail("opportunities")

        result = send_reminder_emails(supabase=store, now=NOW)

        self.assertFalse(result.success)
        self.assertEqual(result.emails_sent, 0)
        self.assertIn("Error fetching opportunities", result.error)

    def test_dry_run_sends_nothing(self, mock_send):
        event = create_test_event(event_id="e1", start_time=NOW + timedelta(hours=23, minutes=30))

        result = send_reminder_emails(supabase=_store([event], [create_test_signup("e1")]), now=NOW, dry_run=True)

        self.assertEqual(result.emails_sent, 1)
        mock_send.assert_not_called()

    def test_null_title_still_reminds(self, mock_send):
        mock_send.return_value = create_send_result()
        event = create_test_event(event_id="e1", start_time=NOW + timedelta(hours=23, minutes=30), title=None)

        result = send_reminder_emails(supabase=_store([event], [create_test_signup("e1")]), now=NOW)

        self.assertEqual((result.emails_sent, result.emails_failed), (1, 0))
        self.assertEqual(mock_send.call_args.args[1].title, "Untitled opportunity")


if __name__ == "__main__":
    unittest.main()
