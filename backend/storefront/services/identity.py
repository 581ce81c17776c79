# storefront/services/identity.py
"""
Identity service: registration, login, logout and current-user lookup.

Checks run in a fixed order and the first failure wins. Login answers an
unknown email and a wrong password with the same InvalidCredentials error so
the response never tells whether an address is registered.
"""
import functools
import logging
import secrets
from typing import Optional

from fastapi.concurrency import run_in_threadpool

from storefront.core.errors import (
    ConflictError,
    InternalError,
    InvalidCredentials,
    Unauthenticated,
    ValidationError,
)
from storefront.core.security import hash_password, verify_password
from storefront.models.user import User
from storefront.services import sessions, store

logger = logging.getLogger("uvicorn.error")


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


async def _hash(password: str) -> str:
    # Argon2 is deliberately slow; keep it off the event loop
    try:
        return await run_in_threadpool(hash_password, password)
    except Exception as exc:
        logger.exception("[identity] password hashing failed")
        raise InternalError() from exc


@functools.lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return hash_password(secrets.token_urlsafe(16))


def _check_password(user: Optional[User], password: str) -> bool:
    # Unknown emails still pay for one argon2 verify so timing matches a wrong password
    stored_hash = user.password_hash if user is not None else _dummy_hash()
    return verify_password(password, stored_hash)


async def register(name: str, email: str, password: str) -> tuple[User, str]:
    """
    Create an account and sign it in.

    Args:
        name: Display name (trimmed)
        email: Login email (trimmed, lowercased)
        password: Plain text password (stored only as a hash)

    Returns:
        (user, session_id) for the new account

    Raises:
        ValidationError (400): If any field is blank
        ConflictError (409): If the email is already registered
    """
    name = (name or "").strip()
    email = normalize_email(email)
    password = password or ""
    if not name or not email or not password.strip():
        raise ValidationError("name, email, and password are required")

    # Fast path; the unique index still decides under concurrent registrations
    if await store.find_user_by_email(email):
        raise ConflictError()

    password_hash = await _hash(password)

    # User row and first session commit together
    async with store.transaction() as conn:
        user = await store.create_user(name, email, password_hash, using_db=conn)
        session_id = await sessions.issue(user.id, using_db=conn)

    logger.info("[identity] registered user id=%s", user.id)
    return user, session_id


async def login(email: str, password: str) -> tuple[User, str]:
    """
    Verify credentials and open a new session.

    A user may hold any number of sessions; earlier ones stay valid.

    Raises:
        ValidationError (400): If email or password is blank
        InvalidCredentials (401): Unknown email or wrong password
    """
    email = normalize_email(email)
    password = password or ""
    if not email or not password:
        raise ValidationError("email and password are required")

    user = await store.find_user_by_email(email)
    matches = await run_in_threadpool(_check_password, user, password)
    if user is None or not matches:
        logger.warning("[identity] failed login attempt")
        raise InvalidCredentials()

    session_id = await sessions.issue(user.id)
    logger.info("[identity] login user id=%s", user.id)
    return user, session_id


async def logout(session_id: Optional[str]) -> None:
    """Revoke the session if there is one. Never fails for an unknown session."""
    await sessions.revoke(session_id)


async def current_user(session_id: Optional[str]) -> User:
    """
    Get the user behind a session.

    Raises:
        Unauthenticated (401): If no session, or it is unknown or expired
    """
    user = await sessions.resolve(session_id)
    if user is None:
        raise Unauthenticated()
    return user
