"""Verification commands: emailed-link flows and TOTP enrollment."""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class VerifyAccount:
    """Confirm email ownership with an ``account_verification`` token."""

    token: str


@dataclass(frozen=True, kw_only=True)
class ConfirmEmailChange:
    """Promote ``email_pending`` with an ``email_change`` token."""

    token: str


@dataclass(frozen=True, kw_only=True)
class ResendVerificationEmail:
    """Re-issue an account verification link to an unverified address."""

    email: str


@dataclass(frozen=True, kw_only=True)
class RequestPasswordReset:
    """Email a password reset link if the address belongs to an account."""

    email: str


@dataclass(frozen=True, kw_only=True)
class ResetPassword:
    """Set a new password with a ``password_reset`` token.

    All fields are optional at the schema level so the handler can answer
    a missing field with one combined message.

    Attributes:
        email: Address of the account the token was issued for.
        new_password: Plaintext replacement password.
        token: Value from the emailed link.
    """

    email: str | None
    new_password: str | None
    token: str | None


@dataclass(frozen=True, kw_only=True)
class RequestAccountDeletion:
    """Email an account deletion link to the signed-in user."""

    user_id: int


@dataclass(frozen=True, kw_only=True)
class SetTotpAuth:
    """Enable or disable TOTP two-factor authentication.

    Attributes:
        user_id: Target user (already matched against the session).
        totp_auth_on: Desired state.
        totp_secret: Base32 secret from ``GetTotpSecret`` (required to enable).
        totp_code: Current code for ``totp_secret`` (required to enable).
    """

    user_id: int
    totp_auth_on: bool
    totp_secret: str | None = None
    totp_code: str | None = None
