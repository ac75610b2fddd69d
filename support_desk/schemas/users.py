"""
User account schemas.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, constr

from .enums import UserRole


class RegisterRequest(BaseModel):
    """Payload for creating a new account."""

    email: constr(min_length=3, max_length=255)
    password: constr(min_length=1, max_length=1024)
    first_name: constr(min_length=1, max_length=100)
    last_name: constr(min_length=1, max_length=100)
    role: UserRole = UserRole.CUSTOMER

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "alice@example.com",
                "password": "correct horse battery staple",
                "first_name": "Alice",
                "last_name": "Liddell",
                "role": "customer",
            }
        }
    )


class LoginRequest(BaseModel):
    """Credentials presented at login."""

    email: constr(min_length=1, max_length=255)
    password: constr(min_length=1, max_length=1024)


class UserResponse(BaseModel):
    """Outward view of a user. The password hash is never included."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    first_name: str
    last_name: str
    role: str
    email_verified: bool
    created_at: datetime


class LoginResponse(BaseModel):
    """A freshly issued token together with the authenticated user."""

    token: str
    user: UserResponse


class ClaimsResponse(BaseModel):
    """Identity asserted by a verified token."""

    user_id: int = Field(..., description="Token subject")
    email: str
    role: str
    expires_at: datetime
