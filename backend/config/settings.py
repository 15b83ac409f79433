# This module collects the environment-driven settings and the fixed time
# windows used by the scheduled jobs. Values are read once at import time
# after loading a local .env file.

import os
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()

# Email delivery via Resend
RESEND_API_KEY = os.getenv("RESEND_API_KEY")
NOTIFICATION_FROM_EMAIL = os.getenv("NOTIFICATION_FROM_EMAIL", "notifications@voluna.org")
NOTIFICATION_REPLY_TO = os.getenv("NOTIFICATION_REPLY_TO", "support@voluna.org")
EMAIL_SEND_DELAY_SECONDS = float(os.getenv("EMAIL_SEND_DELAY_SECONDS", "0.1"))

# Public site, used for links embedded in emails
SITE_URL = os.getenv("SITE_URL", "https://www.voluna.org").rstrip("/")

# Shared secret expected from the cron invoker. Unset means every call is allowed.
CRON_SECRET = os.getenv("CRON_SECRET")
CRON_AUTH_TOKEN = os.getenv("CRON_AUTH_TOKEN")

# Reminder: events starting between 23 and 24 hours from now
REMINDER_WINDOW_START = timedelta(hours=23)
REMINDER_WINDOW_END = timedelta(hours=24)

# Roll call: wide query buffer to absorb scheduler jitter...
ROLL_CALL_BUFFER_START = timedelta(minutes=2)
ROLL_CALL_BUFFER_END = timedelta(minutes=12)
# ...and the narrower window in which a notice may actually go out
ROLL_CALL_SEND_WINDOW_START = timedelta(minutes=2)
ROLL_CALL_SEND_WINDOW_END = timedelta(minutes=9)

# Fallback length of an event with no end time and no duration_hours
DEFAULT_EVENT_DURATION = timedelta(hours=2)

RECURRING_FREQUENCIES = ["daily", "weekly", "monthly"]
