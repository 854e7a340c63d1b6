"""Schemas shared by several resources."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from latchkey.domain.entities import User


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str = Field(..., description="Human-readable outcome")


class UserResponse(BaseModel):
    """Sanitized user.

    Never carries the password hash, the pending email or any TOTP secret
    field.
    """

    id: int = Field(..., description="User identifier")
    username: str = Field(..., description="Username")
    email: str = Field(..., description="Email address")
    role: str = Field(..., description="Role (admin or user)")
    account_verified: bool = Field(..., description="Email ownership confirmed")
    totp_auth_on: bool = Field(..., description="Two-factor authentication enabled")
    created_at: datetime = Field(..., description="Registration timestamp")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "username": "ada_lovelace",
                "email": "ada@example.com",
                "role": "user",
                "account_verified": True,
                "totp_auth_on": False,
                "created_at": "2024-01-15T10:30:00Z",
            }
        }
    )

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            role=user.role.value,
            account_verified=user.account_verified,
            totp_auth_on=user.totp_auth_on,
            created_at=user.created_at,
        )


class UserEnvelope(BaseModel):
    """``{"user": ...}`` wrapper (``null`` when there is no user)."""

    user: UserResponse | None = Field(None, description="User, or null")
