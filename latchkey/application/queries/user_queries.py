"""User queries."""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class GetUser:
    """Fetch one user by id."""

    user_id: int


@dataclass(frozen=True, kw_only=True)
class GetTotpSecret:
    """Generate a TOTP secret and QR image for enrollment.

    Nothing is stored; the secret comes back with ``SetTotpAuth``.
    """

    user_id: int
