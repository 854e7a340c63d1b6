"""Session request/response schemas.

RESTful Endpoints:
    POST   /api/v1/sessions                   - Sign in
    POST   /api/v1/sessions/verify-totp       - Complete 2FA sign-in
    POST   /api/v1/sessions/refresh-session   - New access cookie
    DELETE /api/v1/sessions                   - Sign out
    GET    /api/v1/sessions                   - Current user (nullable)
"""

from pydantic import BaseModel, ConfigDict, Field

from latchkey.domain.types import UserId
from latchkey.schemas.common_schemas import UserResponse


class SignInRequest(BaseModel):
    """Sign-in credentials.

    ``hCaptchaToken`` is optional here so a missing token gets its own
    message instead of a generic validation error.
    """

    email: str = Field(..., max_length=255, description="Email address")
    password: str = Field(..., max_length=128, description="Password")
    h_captcha_token: str | None = Field(
        None, alias="hCaptchaToken", description="hCaptcha response token"
    )

    model_config = ConfigDict(populate_by_name=True)


class SignInResponse(BaseModel):
    """Session started; cookies are set on the response."""

    message: str = Field(..., description="Outcome message")
    user: UserResponse


class TotpChallengeResponse(BaseModel):
    """Credentials accepted; a TOTP code is required before cookies are set."""

    message: str = Field(..., description="Outcome message")
    require_totp: bool = Field(True, alias="requireTotp")
    user_id: int = Field(..., alias="userId")

    model_config = ConfigDict(populate_by_name=True)


class VerifyTotpRequest(BaseModel):
    """Second sign-in step. Fields are optional so absence maps to one message."""

    user_id: UserId | None = Field(None, alias="userId")
    totp_code: str | None = Field(
        None, alias="totpCode", max_length=16, description="6-digit TOTP code"
    )

    model_config = ConfigDict(populate_by_name=True)
