"""Verification resource request/response schemas."""

from pydantic import BaseModel, ConfigDict, Field

from latchkey.domain.types import UserId


class UserIdRequest(BaseModel):
    """Body carrying the acting user's id (must match the session)."""

    id: UserId


class EmailRequest(BaseModel):
    """Body for enumeration-safe email flows."""

    email: str = Field(..., max_length=255, description="Email address")


class TotpSecretResponse(BaseModel):
    """Fresh TOTP secret and its QR image."""

    totp_secret: str = Field(..., alias="totpSecret", description="Base32 secret")
    qr_code_image: str = Field(
        ..., alias="qrCodeImage", description="PNG data URI of the provisioning URI"
    )

    model_config = ConfigDict(populate_by_name=True)


class SetTotpAuthRequest(BaseModel):
    """Enable (secret + code required) or disable TOTP."""

    id: UserId
    totp_auth_on: bool = Field(..., alias="totpAuthOn")
    totp_secret: str | None = Field(None, alias="totpSecret", max_length=128)
    totp_code: str | None = Field(None, alias="totpCode", max_length=16)

    model_config = ConfigDict(populate_by_name=True)


class ResetPasswordRequest(BaseModel):
    """Password reset. Fields are optional so absence maps to one message."""

    email: str | None = Field(None, max_length=255)
    new_password: str | None = Field(None, alias="newPassword", max_length=128)
    token: str | None = Field(None, max_length=128)

    model_config = ConfigDict(populate_by_name=True)
