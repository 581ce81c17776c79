from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from storefront.api.v1.deps import get_current_user, get_session_id
from storefront.config import settings
from storefront.core.clock import to_iso
from storefront.models.user import User
from storefront.schemas.auth import LoginRequest, RegisterRequest, UserEnvelope
from storefront.services import identity

router = APIRouter(prefix="/auth", tags=["auth"])


def _user_to_dict(u: User) -> dict:
    """Sanitized user: never includes the password hash."""
    return {
        "id": str(u.id),
        "name": u.name,
        "email": u.email,
        "createdAt": to_iso(u.created_at),
    }


def _set_session_cookie(response: Response, session_id: str) -> None:
    response.set_cookie(
        settings.session_cookie_name,
        session_id,
        max_age=settings.session_max_age_seconds,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=UserEnvelope)
async def register(body: RegisterRequest, response: Response):
    """
    Register a new user account and sign it in.

    Creates the user and its first session in one transaction and sets the
    session cookie. Email is matched case-insensitively.

    Args:
        body: Request body containing name, email and password

    Returns:
        dict: {"user": sanitized user}

    Errors:
        400: Missing name, email or password
        409: Email already registered
    """
    user, session_id = await identity.register(body.name, body.email, body.password)
    _set_session_cookie(response, session_id)
    return {"user": _user_to_dict(user)}


@router.post("/login", response_model=UserEnvelope)
async def login(body: LoginRequest, response: Response):
    """
    Authenticate a user and open a new session.

    Errors:
        400: Missing email or password
        401: Invalid credentials (same answer for unknown email and wrong password)
    """
    user, session_id = await identity.login(body.email, body.password)
    _set_session_cookie(response, session_id)
    return {"user": _user_to_dict(user)}


@router.post("/logout")
async def logout(response: Response, session_id: Optional[str] = Depends(get_session_id)):
    """
    Log out by deleting the session server-side and clearing the cookie.

    Always succeeds, even without a cookie or with an already revoked session.
    """
    await identity.logout(session_id)
    response.delete_cookie(
        settings.session_cookie_name,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )
    return {"ok": True}


@router.get("/me", response_model=UserEnvelope)
async def me(user: User = Depends(get_current_user)):
    """
    Get current authenticated user information.

    Errors:
        401: No session, or session unknown or expired
    """
    return {"user": _user_to_dict(user)}
