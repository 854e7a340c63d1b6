"""Request password reset handler.

Issues a ``password_reset`` token and emails the reset link. The caller
always gets the same answer whether or not the address is registered.
"""

from latchkey.application.commands.verification_commands import RequestPasswordReset
from latchkey.application.errors import ApplicationError
from latchkey.application.services import VerificationTokenStore
from latchkey.core.result import Failure, Result, Success
from latchkey.domain.enums import TokenType
from latchkey.domain.protocols import (
    EmailProtocol,
    LoggerProtocol,
    UnitOfWorkProtocol,
    UserRepository,
)


class RequestPasswordResetHandler:
    """Handler for the RequestPasswordReset command."""

    def __init__(
        self,
        user_repo: UserRepository,
        token_store: VerificationTokenStore,
        email_service: EmailProtocol,
        uow: UnitOfWorkProtocol,
        logger: LoggerProtocol,
        front_end_url: str,
    ) -> None:
        self._user_repo = user_repo
        self._token_store = token_store
        self._email_service = email_service
        self._uow = uow
        self._logger = logger
        self._front_end_url = front_end_url

    async def handle(self, cmd: RequestPasswordReset) -> Result[None, ApplicationError]:
        user = await self._user_repo.find_by_email(cmd.email)
        if user is None:
            self._logger.warning("Password reset requested for unknown address")
            return Success(value=None)

        issued = await self._token_store.issue(user.id, TokenType.PASSWORD_RESET)
        await self._uow.commit()

        reset_url = f"{self._front_end_url}/reset-password?token={issued.token_value}"
        match await self._email_service.send_password_reset_email(
            to_email=user.email,
            username=user.username,
            reset_url=reset_url,
        ):
            case Failure(error=email_error):
                self._logger.error(
                    "Password reset email not sent",
                    user_id=user.id,
                    reason=email_error.message,
                )

        return Success(value=None)
