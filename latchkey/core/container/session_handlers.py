"""Session handler dependency factories.

Request-scoped handler instances for sign-in, TOTP completion, refresh and
reading the current session.
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from latchkey.core.container.infrastructure import (
    get_captcha_verifier,
    get_db_session,
    get_logger,
    get_password_service,
    get_secret_codec,
    get_session_token_service,
    get_totp_service,
)

if TYPE_CHECKING:
    from latchkey.application.commands.handlers.refresh_session_handler import (
        RefreshSessionHandler,
    )
    from latchkey.application.commands.handlers.sign_in_handler import SignInHandler
    from latchkey.application.commands.handlers.verify_totp_handler import (
        VerifyTotpHandler,
    )
    from latchkey.application.queries.handlers.get_session_user_handler import (
        GetSessionUserHandler,
    )
    from latchkey.domain.protocols import CaptchaVerifierProtocol


# ============================================================================
# Session Handler Factories
# ============================================================================


async def get_sign_in_handler(
    session: AsyncSession = Depends(get_db_session),
    captcha_verifier: "CaptchaVerifierProtocol" = Depends(get_captcha_verifier),
) -> "SignInHandler":
    """Get SignIn command handler (request-scoped).

    Creates new handler instance per request with all required dependencies:
    - UserRepository (request-scoped, uses session)
    - BcryptPasswordService (app-scoped singleton)
    - HCaptchaVerifier (app-scoped singleton, overridable through Depends)
    - JWTSessionTokenService (app-scoped singleton)

    Usage:
        @router.post("/sessions")
        async def create_session(
            handler: SignInHandler = Depends(get_sign_in_handler)
        ):
            result = await handler.handle(command)
    """
    from latchkey.application.commands.handlers.sign_in_handler import SignInHandler
    from latchkey.infrastructure.persistence.repositories import UserRepository

    return SignInHandler(
        user_repo=UserRepository(session=session),
        password_service=get_password_service(),
        captcha_verifier=captcha_verifier,
        session_tokens=get_session_token_service(),
        logger=get_logger(),
    )


async def get_verify_totp_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "VerifyTotpHandler":
    """Get VerifyTotp command handler (request-scoped)."""
    from latchkey.application.commands.handlers.verify_totp_handler import (
        VerifyTotpHandler,
    )
    from latchkey.infrastructure.persistence.repositories import UserRepository

    return VerifyTotpHandler(
        user_repo=UserRepository(session=session),
        secret_codec=get_secret_codec(),
        totp_service=get_totp_service(),
        session_tokens=get_session_token_service(),
        logger=get_logger(),
    )


async def get_refresh_session_handler() -> "RefreshSessionHandler":
    """Get RefreshSession command handler (no database access)."""
    from latchkey.application.commands.handlers.refresh_session_handler import (
        RefreshSessionHandler,
    )

    return RefreshSessionHandler(
        session_tokens=get_session_token_service(),
        logger=get_logger(),
    )


async def get_session_user_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "GetSessionUserHandler":
    """Get GetSessionUser query handler (request-scoped)."""
    from latchkey.application.queries.handlers.get_session_user_handler import (
        GetSessionUserHandler,
    )
    from latchkey.infrastructure.persistence.repositories import UserRepository

    return GetSessionUserHandler(
        user_repo=UserRepository(session=session),
        session_tokens=get_session_token_service(),
        logger=get_logger(),
    )
