from supabase import create_client, Client, ClientOptions
from dotenv import load_dotenv
import os

load_dotenv()


def get_supabase_client(url: str | None = None, key: str | None = None) -> Client:
    """
    Get initialized Supabase client using the service role key.

    The cron invoker may pass its own URL/key; otherwise both come from the
    environment. Sessions are never persisted since every job run is a
    one-shot process.
    """
    url = url or os.getenv("SUPABASE_URL")
    key = key or os.getenv("SUPABASE_SERVICE_KEY")

    if not url or not key:
        raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_KEY must be set")

    return create_client(
        url,
        key,
        options=ClientOptions(auto_refresh_token=False, persist_session=False),
    )
