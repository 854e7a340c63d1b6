"""Get user handler."""

from latchkey.application.errors import ApplicationError, ApplicationErrorCode
from latchkey.application.queries.user_queries import GetUser
from latchkey.core.result import Failure, Result, Success
from latchkey.domain.entities import User
from latchkey.domain.protocols import UserRepository


class GetUserHandler:
    """Handler for the GetUser query."""

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    async def handle(self, query: GetUser) -> Result[User, ApplicationError]:
        user = await self._user_repo.find_by_id(query.user_id)
        if user is None:
            return Failure(
                error=ApplicationError(
                    code=ApplicationErrorCode.NOT_FOUND,
                    message="User not found",
                )
            )
        return Success(value=user)
