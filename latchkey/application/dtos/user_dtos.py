"""User lifecycle DTOs."""

from dataclasses import dataclass, field

from latchkey.domain.entities import User


@dataclass(frozen=True, kw_only=True)
class RegisteredUser:
    """Registration result.

    Attributes:
        user: Newly created, unverified user.
        email_sent: False when the verification email could not be delivered
            (the token is kept; the user can request a resend).
    """

    user: User
    email_sent: bool


@dataclass(frozen=True, kw_only=True)
class UpdatedUser:
    """Update result.

    Attributes:
        user: User after the update.
        successful_updates: One message per changed field.
        email_change_requested: A new address was parked in ``email_pending``.
        email_sent: False when the email-change confirmation could not be delivered.
    """

    user: User
    successful_updates: list[str] = field(default_factory=list)
    email_change_requested: bool = False
    email_sent: bool = True


@dataclass(frozen=True, kw_only=True)
class TotpProvisioning:
    """Fresh TOTP secret for enrollment (not yet stored).

    Attributes:
        totp_secret: Base32 secret shown for manual entry.
        qr_code_image: PNG data URI encoding the provisioning URI.
    """

    totp_secret: str
    qr_code_image: str
