"""
CLI for running one scheduled job, called by the external cron invoker.

Usage:
    # Roll-call notices (every few minutes)
    uv run python -m jobs.run_job --job roll-call-emails

    # Daily jobs
    uv run python -m jobs.run_job --job reminder-emails
    uv run python -m jobs.run_job --job daily-digest-emails
    uv run python -m jobs.run_job --job senior-project-daily-digest
    uv run python -m jobs.run_job --job roll-forward-opportunities

    # Explicit token (defaults to CRON_AUTH_TOKEN)
    uv run python -m jobs.run_job --job reminder-emails --token "$CRON_SECRET"

    # Dry run (no emails sent, nothing written)
    uv run python -m jobs.run_job --job roll-call-emails --dry-run

Exit codes: 0 success, 1 job failed, 2 rejected (bad token or job type).
"""

import argparse
import json
from typing import Optional

from config.settings import CRON_AUTH_TOKEN
from jobs.dispatcher import run_job
from jobs.errors import InvalidJobTypeError, UnauthorizedError
from models import JobType
from shared.utils import print_summary


def invoke(
    job: str,
    token: Optional[str],
    dry_run: bool = False,
    supabase_url: Optional[str] = None,
    supabase_key: Optional[str] = None,
) -> int:
    """Run a job, print its JSON result and return the process exit code."""
    try:
        result = run_job(
            job,
            token,
            dry_run=dry_run,
            supabase_url=supabase_url,
            supabase_key=supabase_key,
        )
    except (UnauthorizedError, InvalidJobTypeError) as e:
        print(json.dumps({"error": str(e)}))
        return 2

    response = result.to_response()
    counts = {key: value for key, value in response.items() if key != "success" and isinstance(value, int)}
    print_summary(job, counts)
    print(json.dumps(response, indent=2))
    return 0 if result.success else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run a scheduled notification job")

    parser.add_argument(
        "--job",
        type=str,
        required=True,
        choices=[job.value for job in JobType],
        help="Job to run",
    )

    parser.add_argument(
        "--token",
        type=str,
        default=CRON_AUTH_TOKEN,
        help="Cron secret or 'Bearer <secret>' (defaults to CRON_AUTH_TOKEN)",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Dry run mode (don't send emails or write to the database)",
    )

    parser.add_argument("--supabase-url", type=str, help="Override SUPABASE_URL")
    parser.add_argument("--supabase-key", type=str, help="Override SUPABASE_SERVICE_KEY")

    return parser


def main() -> None:
    """CLI entry point."""
    args = build_parser().parse_args()
    raise SystemExit(
        invoke(
            args.job,
            args.token,
            dry_run=args.dry_run,
            supabase_url=args.supabase_url,
            supabase_key=args.supabase_key,
        )
    )


if __name__ == "__main__":
    main()
