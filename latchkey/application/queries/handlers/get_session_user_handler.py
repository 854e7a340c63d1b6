"""Read session handler.

Never fails: a missing, invalid or expired access token, or a token for a
user that no longer exists, all resolve to ``None``.
"""

from latchkey.application.errors import ApplicationError
from latchkey.application.queries.session_queries import GetSessionUser
from latchkey.core.result import Failure, Result, Success
from latchkey.domain.entities import User
from latchkey.domain.enums import SessionTokenKind
from latchkey.domain.protocols import (
    LoggerProtocol,
    SessionTokenProtocol,
    UserRepository,
)


class GetSessionUserHandler:
    """Handler for the GetSessionUser query."""

    def __init__(
        self,
        user_repo: UserRepository,
        session_tokens: SessionTokenProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._session_tokens = session_tokens
        self._logger = logger

    async def handle(self, query: GetSessionUser) -> Result[User | None, ApplicationError]:
        if not query.access_token:
            return Success(value=None)

        match self._session_tokens.verify(query.access_token, SessionTokenKind.ACCESS):
            case Failure(error=token_error):
                self._logger.debug(
                    "Access token ignored", reason=token_error.code.value
                )
                return Success(value=None)
            case Success(value=claims):
                pass

        return Success(value=await self._user_repo.find_by_id(claims.user_id))
