from typing import Optional

from fastapi import Request

from storefront.config import settings
from storefront.models.user import User
from storefront.services import identity

def get_session_id(request: Request) -> Optional[str]:
    """
    FastAPI dependency returning the session token from the HttpOnly
    session cookie, or None when the cookie is absent or empty.
    """
    return request.cookies.get(settings.session_cookie_name) or None

async def get_current_user(request: Request) -> User:
    """
    FastAPI dependency to get the current authenticated user.

    Resolves the session cookie through the identity service.

    Raises:
        Unauthenticated (401): If there is no session, or it is unknown or expired

    Usage:
        @router.get("/protected")
        async def protected_route(user: User = Depends(get_current_user)):
            return {"user_id": str(user.id)}
    """
    return await identity.current_user(get_session_id(request))
