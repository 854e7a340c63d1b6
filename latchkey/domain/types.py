"""Annotated types with centralized validation.

Usage:
    from latchkey.domain.types import Email, UserId, Username

    class RegisterRequest(BaseModel):
        username: Username
        email: Email
"""

from typing import Annotated

from pydantic import AfterValidator, Field

from latchkey.core.constants import MAX_USER_ID
from latchkey.domain.validators import (
    validate_email,
    validate_password,
    validate_role,
    validate_username,
)

Username = Annotated[
    str,
    Field(description="Username", examples=["ada_lovelace"]),
    AfterValidator(validate_username),
]

Email = Annotated[
    str,
    Field(max_length=255, description="Email address", examples=["ada@example.com"]),
    AfterValidator(validate_email),
]

Password = Annotated[
    str,
    Field(max_length=72, description="Password", examples=["Correct-Horse-42!x"]),
    AfterValidator(validate_password),
]
"""Password with strength validation (16+ chars, mixed case, digit, symbol)."""

Role = Annotated[
    str,
    Field(description="User role (admin or user)", examples=["user"]),
    AfterValidator(validate_role),
]

UserId = Annotated[
    int,
    Field(ge=1, le=MAX_USER_ID, description="User id", examples=[42]),
]
"""Numeric user id, bounded to the BIGINT primary key range."""
