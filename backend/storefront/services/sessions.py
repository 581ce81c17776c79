# storefront/services/sessions.py
"""
Session manager.
Thin layer over the store: the only way the service turns a cookie token
into a user, and the only place session expiry is applied.
"""
import datetime as dt
from typing import Optional

from storefront.config import settings
from storefront.core.clock import utc_now
from storefront.models.user import User
from storefront.services import store


def _max_age() -> Optional[dt.timedelta]:
    if not settings.session_expiry_enforced:
        return None
    return dt.timedelta(days=settings.session_max_age_days)


async def issue(user_id, using_db=None) -> str:
    """Create a session for user_id and return its token."""
    return await store.create_session(user_id, using_db=using_db)


async def resolve(session_id: Optional[str]) -> Optional[User]:
    """
    Map a session token to its user.

    Returns None without touching the database when no token is given.
    """
    if not session_id:
        return None
    return await store.find_session_user(session_id, max_age=_max_age())


async def revoke(session_id: Optional[str]) -> None:
    if not session_id:
        return
    await store.delete_session(session_id)


async def purge_expired() -> int:
    """Remove sessions past their max age; no-op when expiry is not enforced."""
    max_age = _max_age()
    if max_age is None:
        return 0
    return await store.purge_expired_sessions(utc_now() - max_age)
