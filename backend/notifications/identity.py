"""
Identity lookup: resolve a platform user id to the email on their auth account.

Only the senior project digest needs this; project rows carry the owner's
user id but not an address.
"""

from typing import Any


class IdentityLookupError(Exception):
    """The auth admin API returned no usable email for a user."""


def get_user_email(supabase: Any, user_id: str | None) -> str:
    """
    Fetch a user's email through the Supabase auth admin API.

    Args:
        supabase: Service-role Supabase client
        user_id: Auth user id

    Returns:
        The user's email address

    Raises:
        IdentityLookupError: If the user id is empty, unknown, or has no email
    """
    if not user_id:
        raise IdentityLookupError("Missing user id")

    try:
        response = supabase.auth.admin.get_user_by_id(user_id)
    except Exception as e:
        raise IdentityLookupError(f"Could not fetch user {user_id}: {e}") from e

    user = getattr(response, "user", None)
    email = getattr(user, "email", None) if user else None
    if not email:
        raise IdentityLookupError(f"No email on record for user {user_id}")

    return email
