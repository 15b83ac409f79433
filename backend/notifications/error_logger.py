"""
Error logging utility for scheduled jobs.

Writes one timestamped report file per failure so a failed send or store
update can be inspected after the cron run has exited.
"""

import os
from datetime import datetime
from typing import Any
from uuid import uuid4


def _log_dir() -> str:
    configured = os.getenv("NOTIFICATION_LOG_DIR")
    if configured:
        return configured
    return os.path.join(os.path.dirname(__file__), "logs")


def log_notification_error(
    error_type: str, error_message: str, context: dict[str, Any] | None = None
) -> str:
    """
    Log a job error to a timestamped file.

    Args:
        error_type: Job stage that failed (e.g., 'reminder', 'roll_call', 'digest', 'roll_forward')
        error_message: The error message
        context: Optional dictionary with additional context (event_id, organization_id, etc.)

    Returns:
        Path to the log file created
    """
    log_dir = _log_dir()
    os.makedirs(log_dir, exist_ok=True)

    # Several failures can land in the same second during one batch
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    filename = os.path.join(
        log_dir, f"{error_type}_error_{timestamp}_{uuid4().hex[:6]}.txt"
    )

    with open(filename, "w", encoding="utf-8") as f:
        f.write(f"Scheduled Job Error Report - {datetime.now()}\n")
        f.write("=" * 60 + "\n\n")
        f.write(f"Error Type: {error_type}\n")
        f.write(f"Error Message: {error_message}\n\n")

        if context:
            f.write("Context:\n")
            f.write("-" * 60 + "\n")
            for key, value in context.items():
                f.write(f"{key}: {value}\n")

    return filename
