"""User resource request/response schemas.

Field formats are validated by the Annotated types in
``latchkey.domain.types``; uniqueness and password confirmation are checked
by the handlers.
"""

from pydantic import BaseModel, ConfigDict, Field

from latchkey.domain.types import Email, Password, Role, UserId, Username
from latchkey.schemas.common_schemas import UserResponse


class UserCreateRequest(BaseModel):
    """Registration request."""

    username: Username
    email: Email
    password: Password
    re_entered_password: str = Field(
        ..., alias="reEnteredPassword", max_length=128, description="Password again"
    )
    role: Role = "user"

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "username": "ada_lovelace",
                "email": "ada@example.com",
                "password": "Correct-Horse-42!x",
                "reEnteredPassword": "Correct-Horse-42!x",
            }
        },
    )


class UserUpdateRequest(BaseModel):
    """Partial update; omitted fields are left unchanged."""

    id: UserId
    username: Username | None = None
    email: Email | None = None
    password: Password | None = None
    re_entered_password: str | None = Field(
        None, alias="reEnteredPassword", max_length=128
    )
    role: Role | None = None

    model_config = ConfigDict(populate_by_name=True)


class UserUpdateResponse(BaseModel):
    """Update result."""

    message: str
    successful_updates: list[str] = Field(..., alias="successfulUpdates")
    user: UserResponse

    model_config = ConfigDict(populate_by_name=True)
