"""Request account deletion handler.

Issues an ``account_deletion`` token and emails the confirmation link to
the signed-in user. Unlike the enumeration-safe flows, a delivery failure
is reported: the user is waiting for this specific email.
"""

from latchkey.application.commands.verification_commands import (
    RequestAccountDeletion,
)
from latchkey.application.errors import ApplicationError, ApplicationErrorCode
from latchkey.application.services import VerificationTokenStore
from latchkey.core.result import Failure, Result, Success
from latchkey.domain.enums import TokenType
from latchkey.domain.protocols import (
    EmailProtocol,
    LoggerProtocol,
    UnitOfWorkProtocol,
    UserRepository,
)


class RequestAccountDeletionHandler:
    """Handler for the RequestAccountDeletion command."""

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
        self, cmd: RequestAccountDeletion
    ) -> Result[None, ApplicationError]:
        user = await self._user_repo.find_by_id(cmd.user_id)
        if user is None:
            return Failure(
                error=ApplicationError(
                    code=ApplicationErrorCode.NOT_FOUND,
                    message="User not found",
                )
            )

        issued = await self._token_store.issue(user.id, TokenType.ACCOUNT_DELETION)
        await self._uow.commit()

        delete_url = f"{self._front_end_url}/delete-account?token={issued.token_value}"
        match await self._email_service.send_account_deletion_email(
            to_email=user.email,
            username=user.username,
            delete_url=delete_url,
        ):
            case Failure(error=email_error):
                self._logger.error(
                    "Account deletion email not sent",
                    user_id=user.id,
                    reason=email_error.message,
                )
                return Failure(
                    error=ApplicationError(
                        code=ApplicationErrorCode.EXTERNAL_SERVICE_ERROR,
                        message="Account deletion email could not be sent",
                        domain_error=email_error,
                    )
                )

        self._logger.info("Account deletion requested", user_id=user.id)
        return Success(value=None)
