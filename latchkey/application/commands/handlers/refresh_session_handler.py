"""Refresh session handler.

Verifies the refresh token and mints a new access token. The refresh token
itself is not rotated; it keeps its original expiry.
"""

from latchkey.application.commands.session_commands import RefreshSession
from latchkey.application.errors import ApplicationError, ApplicationErrorCode
from latchkey.core.result import Failure, Result, Success
from latchkey.domain.enums import SessionTokenKind
from latchkey.domain.protocols import LoggerProtocol, SessionTokenProtocol


class RefreshSessionError:
    """Refresh error messages."""

    TOKEN_MISSING = "Refresh token not found"
    TOKEN_INVALID = "Invalid or expired token"


class RefreshSessionHandler:
    """Handler for the RefreshSession command."""

    def __init__(
        self,
        session_tokens: SessionTokenProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._session_tokens = session_tokens
        self._logger = logger

    async def handle(self, cmd: RefreshSession) -> Result[str, ApplicationError]:
        """Return a fresh access token for a valid refresh token."""
        if not cmd.refresh_token:
            return Failure(
                error=ApplicationError(
                    code=ApplicationErrorCode.UNAUTHORIZED,
                    message=RefreshSessionError.TOKEN_MISSING,
                )
            )

        match self._session_tokens.verify(cmd.refresh_token, SessionTokenKind.REFRESH):
            case Failure(error=token_error):
                self._logger.info(
                    "Refresh token rejected", reason=token_error.code.value
                )
                return Failure(
                    error=ApplicationError(
                        code=ApplicationErrorCode.UNAUTHORIZED,
                        message=RefreshSessionError.TOKEN_INVALID,
                        domain_error=token_error,
                    )
                )
            case Success(value=claims):
                self._logger.info("Session refreshed", user_id=claims.user_id)
                return Success(
                    value=self._session_tokens.issue_access_token(claims.user_id)
                )
