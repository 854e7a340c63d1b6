"""Verification token store.

Issues and consumes single-use, typed, expiring tokens. One row per
(user, token_type); issuing again replaces the previous value.

Consumption is one conditional UPDATE. When it matches nothing, a follow-up
read tells the logs why (not found, already used, expired). Callers always
present the same generic message to the client.

Usage:
    store = VerificationTokenStore(token_repo, token_service, logger)
    issued = await store.issue(user.id, TokenType.PASSWORD_RESET)

    match await store.consume(token_value, TokenType.PASSWORD_RESET):
        case Success(value=user_id):
            ...
        case Failure(error=error):
            ...
"""

from datetime import UTC, datetime

from latchkey.core.constants import TOKEN_LOG_PREFIX_LENGTH
from latchkey.core.enums import ErrorCode
from latchkey.core.result import Failure, Result, Success
from latchkey.domain.entities import IssuedToken
from latchkey.domain.enums import TokenType
from latchkey.domain.errors import VerificationTokenError
from latchkey.domain.protocols import (
    LoggerProtocol,
    VerificationTokenRepository,
    VerificationTokenServiceProtocol,
)
from latchkey.domain.validators import validate_token_format

INVALID_TOKEN_MESSAGE = "Invalid or expired token"


def token_prefix(token_value: str) -> str:
    """Loggable prefix of a token value."""
    return token_value[:TOKEN_LOG_PREFIX_LENGTH]


class VerificationTokenStore:
    """Issue and consume verification tokens.

    Writes go through the repository's session; the caller owns the commit.
    """

    def __init__(
        self,
        token_repo: VerificationTokenRepository,
        token_service: VerificationTokenServiceProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._token_repo = token_repo
        self._token_service = token_service
        self._logger = logger

    async def issue(self, user_id: int, token_type: TokenType) -> IssuedToken:
        """Create (or replace) the user's token for ``token_type``.

        Returns:
            IssuedToken with the fresh value and its expiry.
        """
        token_value = self._token_service.generate_token()
        expires_at = self._token_service.calculate_expiration()

        await self._token_repo.upsert(
            user_id=user_id,
            token_type=token_type,
            token_value=token_value,
            expires_at=expires_at,
        )

        self._logger.info(
            "Verification token issued",
            user_id=user_id,
            token_type=token_type.value,
            token_prefix=token_prefix(token_value),
            expires_at=expires_at.isoformat(),
        )
        return IssuedToken(token_value=token_value, expires_at=expires_at)

    async def consume(
        self, token_value: str, token_type: TokenType
    ) -> Result[int, VerificationTokenError]:
        """Mark an active token used and return its owner.

        Returns:
            Success(user_id) if an unused, unexpired token matched.
            Failure(VerificationTokenError) otherwise (including malformed
            values); ``code`` records the reason for logs, ``message`` is
            always the generic text.
        """
        try:
            token_value = validate_token_format(token_value)
        except ValueError:
            self._logger.warning(
                "Verification token rejected",
                token_type=token_type.value,
                reason="malformed",
            )
            return Failure(
                error=VerificationTokenError(
                    code=ErrorCode.VERIFICATION_TOKEN_NOT_FOUND,
                    message=INVALID_TOKEN_MESSAGE,
                    token_type=token_type,
                )
            )

        now = datetime.now(UTC)
        user_id = await self._token_repo.mark_used(token_value, token_type, now)

        if user_id is not None:
            self._logger.info(
                "Verification token consumed",
                user_id=user_id,
                token_type=token_type.value,
                token_prefix=token_prefix(token_value),
            )
            return Success(value=user_id)

        existing = await self._token_repo.find_by_value(token_value, token_type)
        if existing is not None and existing.is_used():
            code = ErrorCode.VERIFICATION_TOKEN_USED
        elif existing is not None and existing.is_expired(now):
            code = ErrorCode.VERIFICATION_TOKEN_EXPIRED
        else:
            code = ErrorCode.VERIFICATION_TOKEN_NOT_FOUND

        self._logger.warning(
            "Verification token rejected",
            token_type=token_type.value,
            token_prefix=token_prefix(token_value),
            reason=code.value,
        )
        return Failure(
            error=VerificationTokenError(
                code=code,
                message=INVALID_TOKEN_MESSAGE,
                token_type=token_type,
            )
        )
