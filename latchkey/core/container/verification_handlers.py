"""Verification handler dependency factories.

Request-scoped handler instances for emailed-link flows (account
verification, email change, password reset, account deletion) and TOTP
enrollment.
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
    get_secret_codec,
    get_totp_service,
)
from latchkey.core.container.repositories import build_token_store

if TYPE_CHECKING:
    from latchkey.application.commands.handlers.confirm_email_change_handler import (
        ConfirmEmailChangeHandler,
    )
    from latchkey.application.commands.handlers.request_account_deletion_handler import (
        RequestAccountDeletionHandler,
    )
    from latchkey.application.commands.handlers.request_password_reset_handler import (
        RequestPasswordResetHandler,
    )
    from latchkey.application.commands.handlers.resend_verification_email_handler import (
        ResendVerificationEmailHandler,
    )
    from latchkey.application.commands.handlers.reset_password_handler import (
        ResetPasswordHandler,
    )
    from latchkey.application.commands.handlers.set_totp_auth_handler import (
        SetTotpAuthHandler,
    )
    from latchkey.application.commands.handlers.verify_account_handler import (
        VerifyAccountHandler,
    )
    from latchkey.application.queries.handlers.get_totp_secret_handler import (
        GetTotpSecretHandler,
    )
    from latchkey.domain.protocols import EmailProtocol


# ============================================================================
# Emailed-Link Handler Factories
# ============================================================================


async def get_verify_account_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "VerifyAccountHandler":
    """Get VerifyAccount command handler (request-scoped)."""
    from latchkey.application.commands.handlers.verify_account_handler import (
        VerifyAccountHandler,
    )
    from latchkey.infrastructure.persistence.repositories import UserRepository

    return VerifyAccountHandler(
        user_repo=UserRepository(session=session),
        token_store=build_token_store(session),
        uow=session,
        logger=get_logger(),
    )


async def get_confirm_email_change_handler(
    session: AsyncSession = Depends(get_db_session),
    email_service: "EmailProtocol" = Depends(get_email_service),
) -> "ConfirmEmailChangeHandler":
    """Get ConfirmEmailChange command handler (request-scoped)."""
    from latchkey.application.commands.handlers.confirm_email_change_handler import (
        ConfirmEmailChangeHandler,
    )
    from latchkey.infrastructure.persistence.repositories import UserRepository

    return ConfirmEmailChangeHandler(
        user_repo=UserRepository(session=session),
        token_store=build_token_store(session),
        email_service=email_service,
        uow=session,
        logger=get_logger(),
    )


async def get_resend_verification_email_handler(
    session: AsyncSession = Depends(get_db_session),
    email_service: "EmailProtocol" = Depends(get_email_service),
) -> "ResendVerificationEmailHandler":
    """Get ResendVerificationEmail command handler (request-scoped)."""
    from latchkey.application.commands.handlers.resend_verification_email_handler import (
        ResendVerificationEmailHandler,
    )
    from latchkey.infrastructure.persistence.repositories import UserRepository

    return ResendVerificationEmailHandler(
        user_repo=UserRepository(session=session),
        token_store=build_token_store(session),
        email_service=email_service,
        uow=session,
        logger=get_logger(),
        front_end_url=settings.front_end_url,
    )


async def get_request_password_reset_handler(
    session: AsyncSession = Depends(get_db_session),
    email_service: "EmailProtocol" = Depends(get_email_service),
) -> "RequestPasswordResetHandler":
    """Get RequestPasswordReset command handler (request-scoped)."""
    from latchkey.application.commands.handlers.request_password_reset_handler import (
        RequestPasswordResetHandler,
    )
    from latchkey.infrastructure.persistence.repositories import UserRepository

    return RequestPasswordResetHandler(
        user_repo=UserRepository(session=session),
        token_store=build_token_store(session),
        email_service=email_service,
        uow=session,
        logger=get_logger(),
        front_end_url=settings.front_end_url,
    )


async def get_reset_password_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ResetPasswordHandler":
    """Get ResetPassword command handler (request-scoped)."""
    from latchkey.application.commands.handlers.reset_password_handler import (
        ResetPasswordHandler,
    )
    from latchkey.infrastructure.persistence.repositories import UserRepository

    return ResetPasswordHandler(
        user_repo=UserRepository(session=session),
        password_service=get_password_service(),
        token_store=build_token_store(session),
        uow=session,
        logger=get_logger(),
    )


async def get_request_account_deletion_handler(
    session: AsyncSession = Depends(get_db_session),
    email_service: "EmailProtocol" = Depends(get_email_service),
) -> "RequestAccountDeletionHandler":
    """Get RequestAccountDeletion command handler (request-scoped)."""
    from latchkey.application.commands.handlers.request_account_deletion_handler import (
        RequestAccountDeletionHandler,
    )
    from latchkey.infrastructure.persistence.repositories import UserRepository

    return RequestAccountDeletionHandler(
        user_repo=UserRepository(session=session),
        token_store=build_token_store(session),
        email_service=email_service,
        uow=session,
        logger=get_logger(),
        front_end_url=settings.front_end_url,
    )


# ============================================================================
# TOTP Enrollment Handler Factories
# ============================================================================


async def get_totp_secret_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "GetTotpSecretHandler":
    """Get GetTotpSecret query handler (request-scoped)."""
    from latchkey.application.queries.handlers.get_totp_secret_handler import (
        GetTotpSecretHandler,
    )
    from latchkey.infrastructure.persistence.repositories import UserRepository

    return GetTotpSecretHandler(
        user_repo=UserRepository(session=session),
        totp_service=get_totp_service(),
        logger=get_logger(),
        issuer_name=settings.app_name,
    )


async def get_set_totp_auth_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "SetTotpAuthHandler":
    """Get SetTotpAuth command handler (request-scoped)."""
    from latchkey.application.commands.handlers.set_totp_auth_handler import (
        SetTotpAuthHandler,
    )
    from latchkey.infrastructure.persistence.repositories import UserRepository

    return SetTotpAuthHandler(
        user_repo=UserRepository(session=session),
        secret_codec=get_secret_codec(),
        totp_service=get_totp_service(),
        uow=session,
        logger=get_logger(),
    )
