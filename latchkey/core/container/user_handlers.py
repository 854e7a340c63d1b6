"""User lifecycle handler dependency factories.

Request-scoped handler instances for registration, reading, updating and
deleting accounts.
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from latchkey.core.config import settings
from latchkey.core.container.infrastructure import (
    get_db_session,
    get_email_service,
    get_logger,
    get_password_service,
)
from latchkey.core.container.repositories import build_token_store

if TYPE_CHECKING:
    from latchkey.application.commands.handlers.delete_account_handler import (
        DeleteAccountHandler,
    )
    from latchkey.application.commands.handlers.register_user_handler import (
        RegisterUserHandler,
    )
    from latchkey.application.commands.handlers.update_user_handler import (
        UpdateUserHandler,
    )
    from latchkey.application.queries.handlers.get_user_handler import GetUserHandler
    from latchkey.domain.protocols import EmailProtocol


async def get_register_user_handler(
    session: AsyncSession = Depends(get_db_session),
    email_service: "EmailProtocol" = Depends(get_email_service),
) -> "RegisterUserHandler":
    """Get RegisterUser command handler (request-scoped).

    Creates new handler instance per request with all required dependencies:
    - UserRepository (request-scoped, uses session)
    - VerificationTokenStore (request-scoped, uses session)
    - BcryptPasswordService (app-scoped singleton)
    - Email service (app-scoped singleton, overridable through Depends)

    The session doubles as the handler's unit of work.
    """
    from latchkey.application.commands.handlers.register_user_handler import (
        RegisterUserHandler,
    )
    from latchkey.infrastructure.persistence.repositories import UserRepository

    return RegisterUserHandler(
        user_repo=UserRepository(session=session),
        password_service=get_password_service(),
        token_store=build_token_store(session),
        email_service=email_service,
        uow=session,
        logger=get_logger(),
        front_end_url=settings.front_end_url,
    )


async def get_get_user_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "GetUserHandler":
    """Get GetUser query handler (request-scoped)."""
    from latchkey.application.queries.handlers.get_user_handler import GetUserHandler
    from latchkey.infrastructure.persistence.repositories import UserRepository

    return GetUserHandler(user_repo=UserRepository(session=session))


async def get_update_user_handler(
    session: AsyncSession = Depends(get_db_session),
    email_service: "EmailProtocol" = Depends(get_email_service),
) -> "UpdateUserHandler":
    """Get UpdateUser command handler (request-scoped)."""
    from latchkey.application.commands.handlers.update_user_handler import (
        UpdateUserHandler,
    )
    from latchkey.infrastructure.persistence.repositories import UserRepository

    return UpdateUserHandler(
        user_repo=UserRepository(session=session),
        password_service=get_password_service(),
        token_store=build_token_store(session),
        email_service=email_service,
        uow=session,
        logger=get_logger(),
        front_end_url=settings.front_end_url,
    )


async def get_delete_account_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "DeleteAccountHandler":
    """Get DeleteAccount command handler (request-scoped)."""
    from latchkey.application.commands.handlers.delete_account_handler import (
        DeleteAccountHandler,
    )
    from latchkey.infrastructure.persistence.repositories import UserRepository

    return DeleteAccountHandler(
        user_repo=UserRepository(session=session),
        token_store=build_token_store(session),
        uow=session,
        logger=get_logger(),
    )
