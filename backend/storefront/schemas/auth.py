# storefront/schemas/auth.py
"""
Pydantic schemas for authentication endpoints.
Defines request/response models for registration, login and user information.
"""
from typing import Any

from pydantic import BaseModel, field_validator


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        raise ValueError("expected a string")
    return str(value)


class RegisterRequest(BaseModel):
    """
    Request model for user registration.
    Blank fields are rejected by the identity service with a 400.
    """
    name: str = ""
    email: str = ""
    password: str = ""  # Plain text, hashed server-side; not trimmed

    @field_validator("name", "email", "password", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return _as_text(value)


class LoginRequest(BaseModel):
    email: str = ""  # Case-insensitive login key
    password: str = ""

    @field_validator("email", "password", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return _as_text(value)


class UserOut(BaseModel):
    """
    Sanitized user returned in responses.
    The password hash is never part of it.
    """
    id: str
    name: str
    email: str
    createdAt: str


class UserEnvelope(BaseModel):
    user: UserOut
