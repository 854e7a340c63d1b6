"""Verify account handler.

Consumes the ``account_verification`` token and flips ``account_verified``
in one transaction.
"""

from latchkey.application.commands.verification_commands import VerifyAccount
from latchkey.application.errors import ApplicationError, ApplicationErrorCode
from latchkey.application.services import VerificationTokenStore
from latchkey.application.services.verification_token_store import (
    INVALID_TOKEN_MESSAGE,
)
from latchkey.core.result import Failure, Result, Success
from latchkey.domain.enums import TokenType
from latchkey.domain.protocols import LoggerProtocol, UnitOfWorkProtocol, UserRepository


class VerifyAccountHandler:
    """Handler for the VerifyAccount command."""

    def __init__(
        self,
        user_repo: UserRepository,
        token_store: VerificationTokenStore,
        uow: UnitOfWorkProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._token_store = token_store
        self._uow = uow
        self._logger = logger

    async def handle(self, cmd: VerifyAccount) -> Result[int, ApplicationError]:
        """Return Success(user_id) of the verified account."""
        invalid = Failure(
            error=ApplicationError(
                code=ApplicationErrorCode.VALIDATION_FAILED,
                message=INVALID_TOKEN_MESSAGE,
            )
        )

        match await self._token_store.consume(cmd.token, TokenType.ACCOUNT_VERIFICATION):
            case Failure():
                return invalid
            case Success(value=user_id):
                pass

        user = await self._user_repo.find_by_id(user_id)
        if user is None:
            await self._uow.rollback()
            self._logger.warning("Verification token owner missing", user_id=user_id)
            return invalid

        user.mark_verified()
        await self._user_repo.update(user)
        await self._uow.commit()

        self._logger.info("Account verified", user_id=user.id)
        return Success(value=user.id)
