"""TOTP completion handler.

Second step of a sign-in paused by a TOTP challenge. Decrypts the stored
secret, checks the code with one step of clock skew either side, then
issues the same tokens as a plain sign-in.
"""

from latchkey.application.commands.session_commands import VerifyTotp
from latchkey.application.dtos import SessionIssued
from latchkey.application.errors import ApplicationError, ApplicationErrorCode
from latchkey.core.result import Failure, Result, Success
from latchkey.domain.protocols import (
    LoggerProtocol,
    SecretCodecProtocol,
    SessionTokenProtocol,
    TotpProtocol,
    UserRepository,
)
from latchkey.domain.validators import validate_totp_code


class VerifyTotpError:
    """TOTP completion error messages."""

    MISSING_FIELDS = "userId and 6-digit TOTP required"
    USER_NOT_FOUND = "User not found"
    INVALID_TOTP = "Invalid TOTP"


class VerifyTotpHandler:
    """Handler for the VerifyTotp command."""

    def __init__(
        self,
        user_repo: UserRepository,
        secret_codec: SecretCodecProtocol,
        totp_service: TotpProtocol,
        session_tokens: SessionTokenProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._secret_codec = secret_codec
        self._totp_service = totp_service
        self._session_tokens = session_tokens
        self._logger = logger

    async def handle(self, cmd: VerifyTotp) -> Result[SessionIssued, ApplicationError]:
        """Handle TOTP completion.

        Returns:
            Success(SessionIssued) on a valid code.
            Failure(ApplicationError): 400 missing fields, 404 unknown user,
            401 for a wrong code, 2FA not enabled, or an undecryptable secret.
        """
        missing = Failure(
            error=ApplicationError(
                code=ApplicationErrorCode.VALIDATION_FAILED,
                message=VerifyTotpError.MISSING_FIELDS,
            )
        )
        if cmd.user_id is None or cmd.totp_code is None:
            return missing
        try:
            validate_totp_code(cmd.totp_code)
        except ValueError:
            return missing

        user = await self._user_repo.find_by_id(cmd.user_id)
        if user is None:
            return Failure(
                error=ApplicationError(
                    code=ApplicationErrorCode.NOT_FOUND,
                    message=VerifyTotpError.USER_NOT_FOUND,
                )
            )

        invalid = Failure(
            error=ApplicationError(
                code=ApplicationErrorCode.UNAUTHORIZED,
                message=VerifyTotpError.INVALID_TOTP,
            )
        )

        if not user.requires_totp() or user.totp_secret is None:
            self._logger.warning(
                "TOTP verification for account without 2FA", user_id=user.id
            )
            return invalid

        match self._secret_codec.decrypt(user.totp_secret):
            case Failure(error=decrypt_error):
                self._logger.error(
                    "Stored TOTP secret could not be decrypted",
                    user_id=user.id,
                    reason=decrypt_error.message,
                )
                return invalid
            case Success(value=secret):
                pass

        if not self._totp_service.verify_code(secret, cmd.totp_code):
            self._logger.info("TOTP rejected", user_id=user.id)
            return invalid

        self._logger.info("User signed in with TOTP", user_id=user.id)
        return Success(
            value=SessionIssued(
                user=user,
                access_token=self._session_tokens.issue_access_token(user.id),
                refresh_token=self._session_tokens.issue_refresh_token(user.id),
            )
        )
