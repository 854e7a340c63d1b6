"""Verifications resource router.

Emailed-link flows and TOTP enrollment. Request endpoints that take a bare
email address answer identically whether or not the address is known.

Endpoints:
    GET   /api/v1/verifications/verify-account-by-email?token=
    GET   /api/v1/verifications/confirm-email-change?token=
    POST  /api/v1/verifications/get-totp-secret
    PATCH /api/v1/verifications/set-totp-auth
    POST  /api/v1/verifications/resend-verification-email
    POST  /api/v1/verifications/send-password-reset-email
    POST  /api/v1/verifications/request-account-deletion
    PATCH /api/v1/verifications/reset-password
"""

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from latchkey.application.commands import (
    ConfirmEmailChange,
    RequestAccountDeletion,
    RequestPasswordReset,
    ResendVerificationEmail,
    ResetPassword,
    SetTotpAuth,
    VerifyAccount,
)
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
from latchkey.application.errors import ApplicationError
from latchkey.application.queries import GetTotpSecret
from latchkey.application.queries.handlers.get_totp_secret_handler import (
    GetTotpSecretHandler,
)
from latchkey.core.container import (
    get_confirm_email_change_handler,
    get_request_account_deletion_handler,
    get_request_password_reset_handler,
    get_resend_verification_email_handler,
    get_reset_password_handler,
    get_set_totp_auth_handler,
    get_totp_secret_handler,
    get_verify_account_handler,
)
from latchkey.core.result import Failure, Success
from latchkey.domain.value_objects import TokenClaims
from latchkey.presentation.routers.api.middleware.auth_dependencies import (
    ensure_session_owner,
    get_session_claims,
)
from latchkey.presentation.routers.api.middleware.trace_middleware import (
    get_trace_id,
)
from latchkey.presentation.routers.api.v1.errors import (
    ErrorResponseBuilder,
    ProblemDetails,
)
from latchkey.schemas.common_schemas import MessageResponse
from latchkey.schemas.verification_schemas import (
    EmailRequest,
    ResetPasswordRequest,
    SetTotpAuthRequest,
    TotpSecretResponse,
    UserIdRequest,
)

EMAIL_VERIFIED = "Email address verified successfully"
EMAIL_UPDATED = "Email address updated successfully"
VERIFICATION_RESENT = (
    "If you entered an email address that is pending verification, "
    "then a new verification email will be sent to that address"
)
PASSWORD_RESET_SENT = (
    "If the email address is associated with an account, "
    "then a password reset link has been sent"
)
ACCOUNT_DELETION_REQUESTED = (
    "Account deletion requested — please check your email to confirm"
)
TOTP_ENABLED = "Two-factor authentication enabled successfully"
TOTP_DISABLED = "Two-factor authentication disabled successfully"
PASSWORD_RESET = "Password reset successfully"

router = APIRouter(prefix="/verifications", tags=["Verifications"])

_SESSION_RESPONSES: dict[int | str, dict[str, object]] = {
    401: {"description": "Not signed in", "model": ProblemDetails},
    403: {"description": "Session belongs to another user", "model": ProblemDetails},
    404: {"description": "User not found", "model": ProblemDetails},
}


def _error_response(request: Request, error: ApplicationError) -> JSONResponse:
    return ErrorResponseBuilder.from_application_error(
        error=error,
        request=request,
        trace_id=get_trace_id(),
    )


@router.get(
    "/verify-account-by-email",
    response_model=MessageResponse,
    responses={400: {"description": "Invalid or expired token", "model": ProblemDetails}},
    summary="Verify account",
    description="Consume an account verification token and mark the account verified.",
)
async def verify_account_by_email(
    request: Request,
    token: str = Query("", max_length=128, description="Account verification token"),
    handler: VerifyAccountHandler = Depends(get_verify_account_handler),
) -> MessageResponse | JSONResponse:
    """GET /api/v1/verifications/verify-account-by-email?token=... → 200 OK"""
    match await handler.handle(VerifyAccount(token=token)):
        case Success():
            return MessageResponse(message=EMAIL_VERIFIED)
        case Failure(error=error):
            return _error_response(request, error)


@router.get(
    "/confirm-email-change",
    response_model=MessageResponse,
    responses={
        400: {"description": "Invalid or expired token", "model": ProblemDetails},
        409: {"description": "Email address taken", "model": ProblemDetails},
    },
    summary="Confirm email change",
    description=(
        "Consume an email change token, promote the pending address and "
        "notify the previous address."
    ),
)
async def confirm_email_change(
    request: Request,
    token: str = Query("", max_length=128, description="Email change token"),
    handler: ConfirmEmailChangeHandler = Depends(get_confirm_email_change_handler),
) -> MessageResponse | JSONResponse:
    """GET /api/v1/verifications/confirm-email-change?token=... → 200 OK"""
    match await handler.handle(ConfirmEmailChange(token=token)):
        case Success():
            return MessageResponse(message=EMAIL_UPDATED)
        case Failure(error=error):
            return _error_response(request, error)


@router.post(
    "/get-totp-secret",
    response_model=TotpSecretResponse,
    responses=_SESSION_RESPONSES,
    summary="Get TOTP secret",
    description=(
        "Generate a fresh TOTP secret and QR code. Nothing is stored until "
        "set-totp-auth confirms a code for it."
    ),
)
async def get_totp_secret(
    request: Request,
    data: UserIdRequest,
    claims: TokenClaims = Depends(get_session_claims),
    handler: GetTotpSecretHandler = Depends(get_totp_secret_handler),
) -> TotpSecretResponse | JSONResponse:
    """POST /api/v1/verifications/get-totp-secret → 200 OK"""
    ensure_session_owner(claims, data.id)

    match await handler.handle(GetTotpSecret(user_id=data.id)):
        case Success(value=provisioning):
            return TotpSecretResponse(
                totp_secret=provisioning.totp_secret,
                qr_code_image=provisioning.qr_code_image,
            )
        case Failure(error=error):
            return _error_response(request, error)


@router.patch(
    "/set-totp-auth",
    response_model=MessageResponse,
    responses={
        400: {"description": "Missing fields or invalid code", "model": ProblemDetails},
        **_SESSION_RESPONSES,
    },
    summary="Enable or disable TOTP",
    description="Enable two-factor authentication (secret and current code required) or disable it.",
)
async def set_totp_auth(
    request: Request,
    data: SetTotpAuthRequest,
    claims: TokenClaims = Depends(get_session_claims),
    handler: SetTotpAuthHandler = Depends(get_set_totp_auth_handler),
) -> MessageResponse | JSONResponse:
    """PATCH /api/v1/verifications/set-totp-auth → 200 OK"""
    ensure_session_owner(claims, data.id)

    command = SetTotpAuth(
        user_id=data.id,
        totp_auth_on=data.totp_auth_on,
        totp_secret=data.totp_secret,
        totp_code=data.totp_code,
    )
    match await handler.handle(command):
        case Success(value=True):
            return MessageResponse(message=TOTP_ENABLED)
        case Success(value=False):
            return MessageResponse(message=TOTP_DISABLED)
        case Failure(error=error):
            return _error_response(request, error)


@router.post(
    "/resend-verification-email",
    response_model=MessageResponse,
    summary="Resend verification email",
    description="Send a new verification link to an unverified account. Always answers the same.",
)
async def resend_verification_email(
    request: Request,
    data: EmailRequest,
    handler: ResendVerificationEmailHandler = Depends(
        get_resend_verification_email_handler
    ),
) -> MessageResponse | JSONResponse:
    """POST /api/v1/verifications/resend-verification-email → 200 OK"""
    match await handler.handle(ResendVerificationEmail(email=data.email)):
        case Success():
            return MessageResponse(message=VERIFICATION_RESENT)
        case Failure(error=error):
            return _error_response(request, error)


@router.post(
    "/send-password-reset-email",
    response_model=MessageResponse,
    summary="Request password reset",
    description="Email a password reset link when the address has an account. Always answers the same.",
)
async def send_password_reset_email(
    request: Request,
    data: EmailRequest,
    handler: RequestPasswordResetHandler = Depends(get_request_password_reset_handler),
) -> MessageResponse | JSONResponse:
    """POST /api/v1/verifications/send-password-reset-email → 200 OK"""
    match await handler.handle(RequestPasswordReset(email=data.email)):
        case Success():
            return MessageResponse(message=PASSWORD_RESET_SENT)
        case Failure(error=error):
            return _error_response(request, error)


@router.post(
    "/request-account-deletion",
    response_model=MessageResponse,
    responses={
        500: {"description": "Deletion email could not be sent", "model": ProblemDetails},
        **_SESSION_RESPONSES,
    },
    summary="Request account deletion",
    description="Email an account deletion link to the signed-in user.",
)
async def request_account_deletion(
    request: Request,
    data: UserIdRequest,
    claims: TokenClaims = Depends(get_session_claims),
    handler: RequestAccountDeletionHandler = Depends(
        get_request_account_deletion_handler
    ),
) -> MessageResponse | JSONResponse:
    """POST /api/v1/verifications/request-account-deletion → 200 OK"""
    ensure_session_owner(claims, data.id)

    match await handler.handle(RequestAccountDeletion(user_id=data.id)):
        case Success():
            return MessageResponse(message=ACCOUNT_DELETION_REQUESTED)
        case Failure(error=error):
            return _error_response(request, error)


@router.patch(
    "/reset-password",
    response_model=MessageResponse,
    responses={400: {"description": "Missing fields, weak password or invalid token", "model": ProblemDetails}},
    summary="Reset password",
    description="Consume a password reset token issued for the given email address and set a new password.",
)
async def reset_password(
    request: Request,
    data: ResetPasswordRequest,
    handler: ResetPasswordHandler = Depends(get_reset_password_handler),
) -> MessageResponse | JSONResponse:
    """PATCH /api/v1/verifications/reset-password → 200 OK"""
    command = ResetPassword(
        email=data.email,
        new_password=data.new_password,
        token=data.token,
    )
    match await handler.handle(command):
        case Success():
            return MessageResponse(message=PASSWORD_RESET)
        case Failure(error=error):
            return _error_response(request, error)
