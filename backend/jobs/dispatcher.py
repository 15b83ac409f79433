"""
Entry point shared by every cron invocation.

Checks the caller's token against CRON_SECRET, resolves the job type and
hands the run to exactly one handler. Authorization and job type are
validated before any store client is created.
"""

import hmac
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from config.settings import CRON_SECRET
from jobs.digests import send_daily_digest_emails, send_senior_project_digest_emails
from jobs.errors import InvalidJobTypeError, UnauthorizedError
from jobs.reminders import send_reminder_emails
from jobs.roll_call import send_roll_call_emails
from jobs.roll_forward import roll_forward_opportunities
from models import JobResult, JobType
from notifications.error_logger import log_notification_error
from shared.db import get_supabase_client

JobHandler = Callable[..., JobResult]

JOB_HANDLERS: Dict[JobType, JobHandler] = {
    JobType.REMINDER_EMAILS: send_reminder_emails,
    JobType.ROLL_CALL_EMAILS: send_roll_call_emails,
    JobType.DAILY_DIGEST_EMAILS: send_daily_digest_emails,
    JobType.SENIOR_PROJECT_DAILY_DIGEST: send_senior_project_digest_emails,
    JobType.ROLL_FORWARD_OPPORTUNITIES: roll_forward_opportunities,
}


def _strip_bearer(token: Optional[str]) -> Optional[str]:
    if token and token.startswith("Bearer "):
        return token[len("Bearer "):]
    return token


def verify_cron_token(token: Optional[str], secret: Optional[str] = None) -> None:
    """
    Check the invoker's token.

    Accepts the raw secret or an Authorization header value ("Bearer <secret>").
    With no secret configured every call is allowed.

    Raises:
        UnauthorizedError: If a secret is configured and the token is missing or wrong
    """
    secret = secret if secret is not None else CRON_SECRET
    if not secret:
        print("⚠️  [Cron] CRON_SECRET not set, allowing all requests")
        return

    token = _strip_bearer(token)
    if not token:
        print("✗ [Cron] Missing or invalid authorization token")
        raise UnauthorizedError("Unauthorized")

    if not hmac.compare_digest(token.encode(), secret.encode()):
        print("✗ [Cron] Authorization token does not match")
        raise UnauthorizedError("Unauthorized")


def resolve_job_type(job_type: Any) -> JobType:
    try:
        return JobType(job_type)
    except ValueError:
        raise InvalidJobTypeError(job_type) from None


def run_job(
    job_type: Any,
    auth_token: Optional[str],
    dry_run: bool = False,
    supabase: Any = None,
    now: Optional[datetime] = None,
    supabase_url: Optional[str] = None,
    supabase_key: Optional[str] = None,
) -> JobResult:
    """
    Authorize the caller and run one job.

    Args:
        job_type: One of the JobType values, e.g. 'roll-call-emails'
        auth_token: Token supplied by the invoker
        dry_run: Passed through to the handler
        supabase: Pre-built client (created from settings/overrides if omitted)
        now: Reference time passed to the handler
        supabase_url: Optional override for SUPABASE_URL
        supabase_key: Optional override for SUPABASE_SERVICE_KEY

    Returns:
        The handler's JobResult, unchanged

    Raises:
        UnauthorizedError: Token rejected
        InvalidJobTypeError: Unknown job type
    """
    verify_cron_token(auth_token)
    job = resolve_job_type(job_type)
    handler = JOB_HANDLERS[job]

    if supabase is None:
        try:
            supabase = get_supabase_client(supabase_url, supabase_key)
        except Exception as e:
            print(f"✗ [Cron] Could not create store client: {e}")
            return JobResult.failure(str(e))

    print(f"[Cron] Starting job: {job.value}{' (dry run)' if dry_run else ''}")

    try:
        result = handler(supabase=supabase, now=now, dry_run=dry_run)
    except Exception as e:
        error_file = log_notification_error(
            error_type="job",
            error_message=str(e),
            context={"job": job.value, "dry_run": dry_run},
        )
        print(f"✗ [Cron] Error processing job {job.value}. Details logged to: {error_file}")
        return JobResult.failure(str(e))

    print(f"[Cron] Job {job.value} completed: {result.to_response()}")
    return result
