"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Logging (structlog console adapter)
- Database (PostgreSQL via asyncpg; SQLite via aiosqlite in tests)
- Password hashing (bcrypt)
- Session tokens (JWT, separate access/refresh secrets)
- Secret codec (AES-256-GCM)
- TOTP (pyotp + segno)
- CAPTCHA (hCaptcha over httpx)
- Email (stub/SMTP)

Every factory reads ``settings``; nothing else in the package reads the
environment.
"""

from functools import lru_cache
from typing import TYPE_CHECKING, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from latchkey.core.config import settings
from latchkey.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from latchkey.domain.protocols import (
        CaptchaVerifierProtocol,
        EmailProtocol,
        LoggerProtocol,
        PasswordHashingProtocol,
        SecretCodecProtocol,
        SessionTokenProtocol,
        TotpProtocol,
        VerificationTokenServiceProtocol,
    )


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from latchkey.infrastructure.logging import ConsoleAdapter

    return ConsoleAdapter(
        use_json=not settings.is_development,
        level=settings.log_level,
    )


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    Use get_db_session() for per-request sessions.
    """
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
    )


# ============================================================================
# Request-Scoped Dependencies (Per-Request)
# ============================================================================


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session (request-scoped).

    Creates new session per request with automatic transaction management:
        - Commits on success
        - Rolls back on exception
        - Always closes session

    Handlers may commit earlier themselves (before sending email).

    Yields:
        Database session for request duration.
    """
    db = get_database()
    async with db.get_session() as session:
        yield session


# ============================================================================
# Security Services (Application-Scoped)
# ============================================================================


@lru_cache()
def get_password_service() -> "PasswordHashingProtocol":
    """Get password hashing service singleton (app-scoped).

    Returns BcryptPasswordService with the configured cost factor (default 12).
    """
    from latchkey.infrastructure.security import BcryptPasswordService

    return BcryptPasswordService(cost_factor=settings.bcrypt_rounds)


@lru_cache()
def get_session_token_service() -> "SessionTokenProtocol":
    """Get JWT session token service singleton (app-scoped).

    Access tokens live 1 hour, refresh tokens 7 days, each signed with its
    own secret.

    Raises:
        ValueError: If the secrets are too short or identical.
    """
    from latchkey.infrastructure.security import JWTSessionTokenService

    return JWTSessionTokenService(
        access_secret=settings.access_token_secret,
        refresh_secret=settings.refresh_token_secret,
    )


@lru_cache()
def get_secret_codec() -> "SecretCodecProtocol":
    """Get TOTP secret codec singleton (app-scoped).

    Returns:
        AesGcmSecretCodec keyed with ``settings.totp_encryption_key``.

    Raises:
        RuntimeError: If the encryption key is invalid.
    """
    from latchkey.core.result import Failure, Success
    from latchkey.infrastructure.security import AesGcmSecretCodec

    match AesGcmSecretCodec.from_base64_key(settings.totp_encryption_key):
        case Success(value=codec):
            return codec
        case Failure(error=err):
            raise RuntimeError(f"Failed to initialize secret codec: {err.message}")


@lru_cache()
def get_totp_service() -> "TotpProtocol":
    """Get TOTP service singleton (app-scoped)."""
    from latchkey.infrastructure.security import TotpService

    return TotpService()


@lru_cache()
def get_verification_token_service() -> "VerificationTokenServiceProtocol":
    """Get verification token generator singleton (app-scoped)."""
    from latchkey.infrastructure.security import VerificationTokenService

    return VerificationTokenService()


# ============================================================================
# External Services (Application-Scoped)
# ============================================================================


@lru_cache()
def get_captcha_verifier() -> "CaptchaVerifierProtocol":
    """Get hCaptcha verifier singleton (app-scoped)."""
    from latchkey.infrastructure.captcha import HCaptchaVerifier

    return HCaptchaVerifier(
        secret=settings.hcaptcha_secret,
        verify_url=settings.hcaptcha_verify_url,
        timeout=settings.hcaptcha_timeout_seconds,
    )


@lru_cache()
def get_email_service() -> "EmailProtocol":
    """Get email service singleton (app-scoped).

    Returns correct adapter based on environment:
        - development/testing/ci: StubEmailService (logs to console)
        - production: SmtpEmailService (STARTTLS relay)
    """
    from latchkey.infrastructure.email import SmtpEmailService, StubEmailService

    if settings.is_production:
        return SmtpEmailService(
            app_name=settings.app_name,
            sender=settings.email_user,
            host=settings.smtp_host,
            port=settings.smtp_port,
            password=settings.email_password,
            logger=get_logger(),
            timeout=settings.smtp_timeout_seconds,
        )
    return StubEmailService(
        app_name=settings.app_name,
        sender=settings.email_user,
        logger=get_logger(),
    )
