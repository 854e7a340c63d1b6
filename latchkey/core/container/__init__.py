"""Container module - Centralized dependency injection.

Re-exports every factory so callers import from one place:

    from latchkey.core.container import get_logger, get_sign_in_handler

Modules:
- infrastructure: Core services (db, logging, security, captcha, email)
- repositories: Verification token store factory
- session_handlers: Sign-in, TOTP completion, refresh, read session
- user_handlers: Registration, read, update, delete
- verification_handlers: Emailed-link flows and TOTP enrollment
"""

# Infrastructure services
from latchkey.core.container.infrastructure import (
    get_captcha_verifier,
    get_database,
    get_db_session,
    get_email_service,
    get_logger,
    get_password_service,
    get_secret_codec,
    get_session_token_service,
    get_totp_service,
    get_verification_token_service,
)

# Session handlers
from latchkey.core.container.session_handlers import (
    get_refresh_session_handler,
    get_session_user_handler,
    get_sign_in_handler,
    get_verify_totp_handler,
)

# User handlers
from latchkey.core.container.user_handlers import (
    get_delete_account_handler,
    get_get_user_handler,
    get_register_user_handler,
    get_update_user_handler,
)

# Verification handlers
from latchkey.core.container.verification_handlers import (
    get_confirm_email_change_handler,
    get_request_account_deletion_handler,
    get_request_password_reset_handler,
    get_resend_verification_email_handler,
    get_reset_password_handler,
    get_set_totp_auth_handler,
    get_totp_secret_handler,
    get_verify_account_handler,
)

__all__ = [
    # Infrastructure
    "get_captcha_verifier",
    "get_database",
    "get_db_session",
    "get_email_service",
    "get_logger",
    "get_password_service",
    "get_secret_codec",
    "get_session_token_service",
    "get_totp_service",
    "get_verification_token_service",
    # Sessions
    "get_refresh_session_handler",
    "get_session_user_handler",
    "get_sign_in_handler",
    "get_verify_totp_handler",
    # Users
    "get_delete_account_handler",
    "get_get_user_handler",
    "get_register_user_handler",
    "get_update_user_handler",
    # Verifications
    "get_confirm_email_change_handler",
    "get_request_account_deletion_handler",
    "get_request_password_reset_handler",
    "get_resend_verification_email_handler",
    "get_reset_password_handler",
    "get_set_totp_auth_handler",
    "get_totp_secret_handler",
    "get_verify_account_handler",
]
