# storefront/core/security.py
"""
Security module for authentication.
Handles password hashing and generation of session and order identifiers.
"""
import secrets
import time

from passlib.context import CryptContext

from storefront.config import settings

# Password hashing context
# Argon2 is a modern, salted, memory-hard password hashing algorithm;
# salt and cost parameters are embedded in every hash string
pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
    argon2__time_cost=settings.password_hash_time_cost,
    argon2__memory_cost=settings.password_hash_memory_cost,
)

# 32 random bytes -> 43 url-safe characters
SESSION_ID_BYTES = 32


def hash_password(plain: str) -> str:
    """
    Hash a plain text password using Argon2.

    Args:
        plain: Plain text password to hash

    Returns:
        Hashed password string (safe to store in database)
    """
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str | None) -> bool:
    """
    Verify a plain text password against a stored hash.

    Args:
        plain: Plain text password to verify
        hashed: Hashed password from database

    Returns:
        True if password matches, False otherwise. A missing or malformed
        stored hash never matches.
    """
    if not hashed:
        return False
    try:
        return pwd_context.verify(plain, hashed)
    except (ValueError, TypeError):
        return False


def new_session_id() -> str:
    """Return an unguessable session identifier from the OS CSPRNG."""
    return secrets.token_urlsafe(SESSION_ID_BYTES)


def new_order_id(prefix: str | None = None) -> str:
    """
    Return a human-readable order identifier.

    Format: <prefix>-<epoch milliseconds>-<6 hex chars>. The random suffix
    keeps two orders placed in the same millisecond apart.
    """
    prefix = prefix or settings.order_id_prefix
    return f"{prefix}-{int(time.time() * 1000)}-{secrets.token_hex(3)}"
