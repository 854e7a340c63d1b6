"""Set TOTP auth handler.

Disabling clears the stored secret without asking for a code. Enabling
requires the secret handed out by ``GetTotpSecret`` plus a current code
for it; only then is the secret encrypted and stored.
"""

from latchkey.application.commands.verification_commands import SetTotpAuth
from latchkey.application.errors import ApplicationError, ApplicationErrorCode
from latchkey.core.result import Failure, Result, Success
from latchkey.domain.protocols import (
    LoggerProtocol,
    SecretCodecProtocol,
    TotpProtocol,
    UnitOfWorkProtocol,
    UserRepository,
)


class SetTotpAuthError:
    """TOTP enrollment error messages."""

    USER_NOT_FOUND = "User not found"
    MISSING_FIELDS = "Missing required 2FA fields"
    INVALID_CODE = "Invalid authentication code"
    ENCRYPTION_FAILED = "Two-factor authentication could not be enabled"


class SetTotpAuthHandler:
    """Handler for the SetTotpAuth command.

    Returns the resulting ``totp_auth_on`` state on success.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        secret_codec: SecretCodecProtocol,
        totp_service: TotpProtocol,
        uow: UnitOfWorkProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._secret_codec = secret_codec
        self._totp_service = totp_service
        self._uow = uow
        self._logger = logger

    async def handle(self, cmd: SetTotpAuth) -> Result[bool, ApplicationError]:
        user = await self._user_repo.find_by_id(cmd.user_id)
        if user is None:
            return Failure(
                error=ApplicationError(
                    code=ApplicationErrorCode.NOT_FOUND,
                    message=SetTotpAuthError.USER_NOT_FOUND,
                )
            )

        if not cmd.totp_auth_on:
            user.disable_totp()
            await self._user_repo.update(user)
            await self._uow.commit()
            self._logger.info("Two-factor authentication disabled", user_id=user.id)
            return Success(value=False)

        if not cmd.totp_secret or not cmd.totp_code:
            return Failure(
                error=ApplicationError(
                    code=ApplicationErrorCode.VALIDATION_FAILED,
                    message=SetTotpAuthError.MISSING_FIELDS,
                )
            )

        if not self._totp_service.verify_code(cmd.totp_secret, cmd.totp_code):
            self._logger.info("TOTP enrollment code rejected", user_id=user.id)
            return Failure(
                error=ApplicationError(
                    code=ApplicationErrorCode.VALIDATION_FAILED,
                    message=SetTotpAuthError.INVALID_CODE,
                )
            )

        match self._secret_codec.encrypt(cmd.totp_secret):
            case Failure(error=encrypt_error):
                self._logger.error(
                    "TOTP secret encryption failed",
                    user_id=user.id,
                    reason=encrypt_error.message,
                )
                return Failure(
                    error=ApplicationError(
                        code=ApplicationErrorCode.INTERNAL_ERROR,
                        message=SetTotpAuthError.ENCRYPTION_FAILED,
                        domain_error=encrypt_error,
                    )
                )
            case Success(value=bundle):
                pass

        user.enable_totp(bundle)
        await self._user_repo.update(user)
        await self._uow.commit()

        self._logger.info("Two-factor authentication enabled", user_id=user.id)
        return Success(value=True)
