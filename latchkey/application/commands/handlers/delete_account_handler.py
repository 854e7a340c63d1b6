"""Delete account handler.

Consumes the ``account_deletion`` token and deletes the user in the same
transaction. If the delete fails, the token is not consumed.
"""

from latchkey.application.commands.user_commands import DeleteAccount
from latchkey.application.errors import ApplicationError, ApplicationErrorCode
from latchkey.application.services import VerificationTokenStore
from latchkey.application.services.verification_token_store import (
    INVALID_TOKEN_MESSAGE,
)
from latchkey.core.result import Failure, Result, Success
from latchkey.domain.enums import TokenType
from latchkey.domain.protocols import LoggerProtocol, UnitOfWorkProtocol, UserRepository


class DeleteAccountHandler:
    """Handler for the DeleteAccount command."""

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

    async def handle(self, cmd: DeleteAccount) -> Result[int, ApplicationError]:
        """Return Success(user_id) of the deleted account."""
        match await self._token_store.consume(cmd.token, TokenType.ACCOUNT_DELETION):
            case Failure(error=token_error):
                return Failure(
                    error=ApplicationError(
                        code=ApplicationErrorCode.VALIDATION_FAILED,
                        message=INVALID_TOKEN_MESSAGE,
                        domain_error=token_error,
                    )
                )
            case Success(value=user_id):
                pass

        await self._user_repo.delete(user_id)
        await self._uow.commit()

        self._logger.info("Account deleted", user_id=user_id)
        return Success(value=user_id)
