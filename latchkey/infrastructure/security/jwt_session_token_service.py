"""JWT session token service (adapter).

Implements SessionTokenProtocol using PyJWT with HMAC-SHA256.

Security:
    - Access and refresh tokens are signed with different secrets, so a
      leaked verification key for one kind cannot forge the other
    - Each token also carries a ``typ`` claim checked on verification
    - Only HS256 is accepted on decode
    - Unique JWT ID (jti) per token

Sessions are stateless: there is no revocation list. A token stays valid
until ``exp`` unless its signing secret is rotated.
"""

from datetime import UTC, datetime, timedelta

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError
from uuid_extensions import uuid7

from latchkey.core.constants import (
    ACCESS_TOKEN_TTL_SECONDS,
    JWT_SECRET_MIN_LENGTH,
    REFRESH_TOKEN_TTL_SECONDS,
)
from latchkey.core.enums import ErrorCode
from latchkey.core.result import Failure, Result, Success
from latchkey.domain.enums import SessionTokenKind
from latchkey.domain.errors import SessionTokenError
from latchkey.domain.value_objects import TokenClaims


class JWTSessionTokenService:
    """Access/refresh token generation and validation.

    Usage:
        from latchkey.core.container import get_session_token_service

        tokens = get_session_token_service()
        access_token = tokens.issue_access_token(user.id)
        result = tokens.verify(access_token, SessionTokenKind.ACCESS)
    """

    ALGORITHM = "HS256"

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        access_ttl_seconds: int = ACCESS_TOKEN_TTL_SECONDS,
        refresh_ttl_seconds: int = REFRESH_TOKEN_TTL_SECONDS,
    ) -> None:
        """Initialize JWT service.

        Args:
            access_secret: Secret for access tokens (at least 32 characters).
            refresh_secret: Secret for refresh tokens (at least 32 characters).
            access_ttl_seconds: Access token lifetime.
            refresh_ttl_seconds: Refresh token lifetime.

        Raises:
            ValueError: If a secret is too short or both secrets are equal.
        """
        for secret in (access_secret, refresh_secret):
            if len(secret) < JWT_SECRET_MIN_LENGTH:
                msg = f"JWT secrets must be at least {JWT_SECRET_MIN_LENGTH} characters"
                raise ValueError(msg)
        if access_secret == refresh_secret:
            msg = "Access and refresh token secrets must differ"
            raise ValueError(msg)

        self._secrets = {
            SessionTokenKind.ACCESS: access_secret,
            SessionTokenKind.REFRESH: refresh_secret,
        }
        self._lifetimes = {
            SessionTokenKind.ACCESS: timedelta(seconds=access_ttl_seconds),
            SessionTokenKind.REFRESH: timedelta(seconds=refresh_ttl_seconds),
        }

    def issue_access_token(self, user_id: int) -> str:
        """Issue a short-lived access token."""
        return self._issue(user_id, SessionTokenKind.ACCESS)

    def issue_refresh_token(self, user_id: int) -> str:
        """Issue a long-lived refresh token (only used to mint access tokens)."""
        return self._issue(user_id, SessionTokenKind.REFRESH)

    def verify(
        self, token: str, kind: SessionTokenKind
    ) -> Result[TokenClaims, SessionTokenError]:
        """Verify a token against the secret for ``kind``.

        Returns:
            Success(TokenClaims) for a valid token.
            Failure(SessionTokenError) with TOKEN_EXPIRED or TOKEN_INVALID.
        """
        try:
            payload = jwt.decode(
                token,
                self._secrets[kind],
                algorithms=[self.ALGORITHM],
                options={"require": ["sub", "iat", "exp", "jti", "typ"]},
            )
        except ExpiredSignatureError:
            return Failure(
                error=SessionTokenError(
                    code=ErrorCode.TOKEN_EXPIRED,
                    message="Token expired",
                )
            )
        except InvalidTokenError:
            return Failure(
                error=SessionTokenError(
                    code=ErrorCode.TOKEN_INVALID,
                    message="Invalid token",
                )
            )

        if payload["typ"] != kind.value:
            return Failure(
                error=SessionTokenError(
                    code=ErrorCode.TOKEN_INVALID,
                    message="Token kind mismatch",
                    details={"expected": kind.value},
                )
            )

        try:
            user_id = int(payload["sub"])
        except (TypeError, ValueError):
            return Failure(
                error=SessionTokenError(
                    code=ErrorCode.TOKEN_INVALID,
                    message="Malformed subject claim",
                )
            )

        return Success(
            value=TokenClaims(
                user_id=user_id,
                kind=kind,
                issued_at=datetime.fromtimestamp(payload["iat"], UTC),
                expires_at=datetime.fromtimestamp(payload["exp"], UTC),
                token_id=str(payload["jti"]),
            )
        )

    def _issue(self, user_id: int, kind: SessionTokenKind) -> str:
        now = datetime.now(UTC)
        payload = {
            "sub": str(user_id),
            "typ": kind.value,
            "iat": int(now.timestamp()),
            "exp": int((now + self._lifetimes[kind]).timestamp()),
            "jti": str(uuid7()),
        }
        token: str = jwt.encode(payload, self._secrets[kind], algorithm=self.ALGORITHM)
        return token
