"""User lifecycle commands."""

from dataclasses import dataclass

from latchkey.domain.enums import UserRole


@dataclass(frozen=True, kw_only=True)
class RegisterUser:
    """Register new user account.

    Creates an unverified user and emails an account verification link.
    The user cannot sign in until the link is followed.

    Attributes:
        username: Requested handle (format already validated).
        email: Email address (format already validated).
        password: Plaintext password (strength already validated).
        re_entered_password: Confirmation that must equal ``password``.
        role: Static role, ``user`` unless requested otherwise.
    """

    username: str
    email: str
    password: str
    re_entered_password: str
    role: UserRole = UserRole.USER


@dataclass(frozen=True, kw_only=True)
class UpdateUser:
    """Change profile fields of the signed-in user.

    Fields left as None are not changed. A new ``email`` is parked in
    ``email_pending`` until the emailed link is followed.

    Attributes:
        user_id: Target user (already matched against the session).
        username: New handle.
        email: New email address.
        password: New plaintext password.
        re_entered_password: Confirmation for ``password``.
        role: New role.
    """

    user_id: int
    username: str | None = None
    email: str | None = None
    password: str | None = None
    re_entered_password: str | None = None
    role: UserRole | None = None


@dataclass(frozen=True, kw_only=True)
class DeleteAccount:
    """Delete an account by consuming an ``account_deletion`` token."""

    token: str
