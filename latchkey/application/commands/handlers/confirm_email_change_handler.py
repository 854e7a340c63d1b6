"""Confirm email change handler.

Flow:
1. Consume the ``email_change`` token
2. Require a pending address that nobody else claimed in the meantime
3. Swap ``email`` for ``email_pending`` and commit
4. Notify the old address that it was removed

Rejections after step 1 roll back, leaving the token unconsumed.
"""

from latchkey.application.commands.verification_commands import ConfirmEmailChange
from latchkey.application.errors import ApplicationError, ApplicationErrorCode
from latchkey.application.services import VerificationTokenStore
from latchkey.application.services.verification_token_store import (
    INVALID_TOKEN_MESSAGE,
)
from latchkey.core.result import Failure, Result, Success
from latchkey.domain.enums import TokenType
from latchkey.domain.protocols import (
    EmailProtocol,
    LoggerProtocol,
    UnitOfWorkProtocol,
    UserRepository,
)


class ConfirmEmailChangeHandler:
    """Handler for the ConfirmEmailChange command."""

    def __init__(
        self,
        user_repo: UserRepository,
        token_store: VerificationTokenStore,
        email_service: EmailProtocol,
        uow: UnitOfWorkProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._token_store = token_store
        self._email_service = email_service
        self._uow = uow
        self._logger = logger

    async def handle(self, cmd: ConfirmEmailChange) -> Result[int, ApplicationError]:
        """Return Success(user_id) once the new address is active."""
        invalid = Failure(
            error=ApplicationError(
                code=ApplicationErrorCode.VALIDATION_FAILED,
                message=INVALID_TOKEN_MESSAGE,
            )
        )

        # Step 1: Consume token
        match await self._token_store.consume(cmd.token, TokenType.EMAIL_CHANGE):
            case Failure():
                return invalid
            case Success(value=user_id):
                pass

        # Step 2: Pending address still available
        user = await self._user_repo.find_by_id(user_id)
        if user is None or user.email_pending is None:
            await self._uow.rollback()
            self._logger.warning("Email change without pending address", user_id=user_id)
            return invalid

        if await self._user_repo.email_taken(user.email_pending, exclude_user_id=user.id):
            await self._uow.rollback()
            self._logger.info("Pending email address taken", user_id=user.id)
            return Failure(
                error=ApplicationError(
                    code=ApplicationErrorCode.CONFLICT,
                    message="Email address taken",
                )
            )

        # Step 3: Swap addresses
        old_email = user.confirm_email_change()
        await self._user_repo.update(user)
        await self._uow.commit()
        self._logger.info("Email address changed", user_id=user.id)

        # Step 4: Tell the old address
        match await self._email_service.send_email_removed_notification(
            to_email=old_email,
            username=user.username,
        ):
            case Failure(error=email_error):
                self._logger.error(
                    "Email removal notice not sent",
                    user_id=user.id,
                    reason=email_error.message,
                )

        return Success(value=user.id)
