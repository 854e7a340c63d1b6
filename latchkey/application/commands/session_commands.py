"""Session commands (CQRS write operations).

Pattern:
- Commands are data containers (no logic)
- Handlers execute business logic and return Result types
"""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class SignIn:
    """Start a session with email/password after a CAPTCHA check.

    Attributes:
        email: Account email address (matched case-insensitively).
        password: Plaintext password (never logged).
        captcha_token: hCaptcha response token from the client (None if absent).

    Example:
        >>> command = SignIn(
        ...     email="ada@example.com",
        ...     password="Correct-Horse-42!x",
        ...     captcha_token="10000000-aaaa-bbbb-cccc-000000000001",
        ... )
        >>> result = await handler.handle(command)
        >>> # Success(SessionIssued) / Success(TotpChallenge) / Failure(ApplicationError)
    """

    email: str
    password: str
    captcha_token: str | None


@dataclass(frozen=True, kw_only=True)
class VerifyTotp:
    """Complete a sign-in that paused for a TOTP code.

    Attributes:
        user_id: Id returned by the TOTP challenge (None if absent).
        totp_code: 6-digit code from the authenticator app (None if absent).
    """

    user_id: int | None
    totp_code: str | None


@dataclass(frozen=True, kw_only=True)
class RefreshSession:
    """Mint a new access token from the refresh cookie.

    Attributes:
        refresh_token: Raw refresh cookie value (None when the cookie is absent).
    """

    refresh_token: str | None
