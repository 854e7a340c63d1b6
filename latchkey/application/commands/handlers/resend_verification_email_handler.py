"""Resend verification email handler.

Always succeeds from the caller's point of view so the response never
reveals whether an address is registered or already verified.
"""

from latchkey.application.commands.verification_commands import (
    ResendVerificationEmail,
)
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


class ResendVerificationEmailHandler:
    """Handler for the ResendVerificationEmail command."""

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

    async def handle(
        self, cmd: ResendVerificationEmail
    ) -> Result[None, ApplicationError]:
        user = await self._user_repo.find_by_email(cmd.email)
        if user is None:
            self._logger.warning("Verification resend for unknown address")
            return Success(value=None)

        if user.account_verified:
            self._logger.info("Verification resend for verified account", user_id=user.id)
            return Success(value=None)

        issued = await self._token_store.issue(user.id, TokenType.ACCOUNT_VERIFICATION)
        await self._uow.commit()

        verification_url = f"{self._front_end_url}/verify-email?token={issued.token_value}"
        match await self._email_service.send_verification_email(
            to_email=user.email,
            username=user.username,
            verification_url=verification_url,
        ):
            case Failure(error=email_error):
                self._logger.error(
                    "Verification email not sent",
                    user_id=user.id,
                    reason=email_error.message,
                )

        return Success(value=None)
