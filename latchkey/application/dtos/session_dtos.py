"""Session DTOs (Data Transfer Objects).

DTOs:
    - SessionIssued: Sign-in or TOTP completion produced session tokens
    - TotpChallenge: Sign-in paused for a TOTP code
"""

from dataclasses import dataclass

from latchkey.domain.entities import User


@dataclass(frozen=True, kw_only=True)
class SessionIssued:
    """Credentials accepted; the caller sets both cookies.

    Attributes:
        user: Signed-in user (sanitized by the presentation layer).
        access_token: Signed 1-hour access token.
        refresh_token: Signed 7-day refresh token.
    """

    user: User
    access_token: str
    refresh_token: str


@dataclass(frozen=True, kw_only=True)
class TotpChallenge:
    """Credentials accepted but the account requires a TOTP code.

    No tokens are issued until the code is verified.
    """

    user_id: int
