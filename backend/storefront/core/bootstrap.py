"""
Bootstrap module for application initialization.
Handles startup housekeeping such as dropping sessions that outlived their max age.
"""
import logging

from storefront.config import settings
from storefront.services import sessions

logger = logging.getLogger("uvicorn.error")

async def purge_expired_sessions() -> None:
    """
    Delete sessions older than SESSION_MAX_AGE_DAYS.
    Only runs when SESSION_EXPIRY_ENFORCED is on; expired sessions are also
    rejected (and removed) one by one when they are presented.
    """
    if not settings.session_expiry_enforced:
        logger.info("[bootstrap] session expiry not enforced -> skip purge.")
        return
    removed = await sessions.purge_expired()
    if removed:
        logger.warning("[bootstrap] Purged %d expired sessions (max age %d days)",
                       removed, settings.session_max_age_days)
