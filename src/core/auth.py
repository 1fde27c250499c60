"""
Identity accessors.

The data-access layer never authenticates anyone itself; it asks a
zero-argument accessor for the signed-in user's email and refuses to run
user-scoped calls when there is none.
"""

from collections.abc import Callable

from core.config import DASHBOARD_USER_EMAIL
from core.errors import AuthRequiredError

UserAccessor = Callable[[], str | None]


def require_user_email(accessor: UserAccessor) -> str:
    """
    Return the current user's normalized (trimmed, lowercase) email.

    Raises:
        AuthRequiredError: if the accessor returns nothing
    """
    email = accessor()
    if not email or not email.strip():
        raise AuthRequiredError()
    return email.strip().lower()


def static_user(email: str | None) -> UserAccessor:
    """Accessor that always returns the given email."""
    return lambda: email


def env_user() -> UserAccessor:
    """Accessor backed by the DASHBOARD_USER_EMAIL setting."""
    return static_user(DASHBOARD_USER_EMAIL or None)
