"""Sessions resource router.

Sessions are a pair of HttpOnly cookies: a 1-hour access token and a 7-day
refresh token, signed with different secrets.

Endpoints:
    POST   /api/v1/sessions                  - Sign in (may return a TOTP challenge)
    POST   /api/v1/sessions/verify-totp      - Complete a TOTP challenge
    POST   /api/v1/sessions/refresh-session  - New access cookie from the refresh cookie
    DELETE /api/v1/sessions                  - Sign out (clears both cookies)
    GET    /api/v1/sessions                  - Current user, or null
"""

from typing import Annotated

from fastapi import APIRouter, Cookie, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from latchkey.application.commands import RefreshSession, SignIn, VerifyTotp
from latchkey.application.commands.handlers.refresh_session_handler import (
    RefreshSessionHandler,
)
from latchkey.application.commands.handlers.sign_in_handler import SignInHandler
from latchkey.application.commands.handlers.verify_totp_handler import (
    VerifyTotpHandler,
)
from latchkey.application.dtos import SessionIssued, TotpChallenge
from latchkey.application.queries import GetSessionUser
from latchkey.application.queries.handlers.get_session_user_handler import (
    GetSessionUserHandler,
)
from latchkey.core.constants import ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE
from latchkey.core.container import (
    get_refresh_session_handler,
    get_session_user_handler,
    get_sign_in_handler,
    get_verify_totp_handler,
)
from latchkey.core.result import Failure, Success
from latchkey.presentation.routers.api.middleware.session_cookies import (
    clear_session_cookies,
    set_access_cookie,
    set_session_cookies,
)
from latchkey.presentation.routers.api.middleware.trace_middleware import (
    get_trace_id,
)
from latchkey.presentation.routers.api.v1.errors import (
    ErrorResponseBuilder,
    ProblemDetails,
)
from latchkey.schemas.common_schemas import MessageResponse, UserEnvelope, UserResponse
from latchkey.schemas.session_schemas import (
    SignInRequest,
    SignInResponse,
    TotpChallengeResponse,
    VerifyTotpRequest,
)

SIGNED_IN = "Signed in successfully"
TOTP_REQUIRED = "Please enter your 6-digit TOTP"
SESSION_REFRESHED = "Session refreshed"
SIGNED_OUT = "Signed out successfully"

router = APIRouter(prefix="/sessions", tags=["Sessions"])


@router.post(
    "",
    response_model=SignInResponse | TotpChallengeResponse,
    responses={
        400: {"description": "hCaptcha token missing or rejected", "model": ProblemDetails},
        401: {"description": "Invalid credentials", "model": ProblemDetails},
        403: {"description": "Email address not verified", "model": ProblemDetails},
        500: {"description": "hCaptcha unavailable", "model": ProblemDetails},
    },
    summary="Sign in",
    description=(
        "Verify hCaptcha and credentials. Sets the session cookies, or returns "
        "a TOTP challenge when two-factor authentication is on."
    ),
)
async def create_session(
    request: Request,
    response: Response,
    data: SignInRequest,
    handler: SignInHandler = Depends(get_sign_in_handler),
) -> SignInResponse | TotpChallengeResponse | JSONResponse:
    """Sign in.

    POST /api/v1/sessions → 200 OK

    Returns:
        SignInResponse with cookies set, TotpChallengeResponse without
        cookies, or JSONResponse with error (400/401/403/500).
    """
    command = SignIn(
        email=data.email,
        password=data.password,
        captcha_token=data.h_captcha_token,
    )
    result = await handler.handle(command)

    match result:
        case Success(value=TotpChallenge(user_id=user_id)):
            return TotpChallengeResponse(message=TOTP_REQUIRED, user_id=user_id)
        case Success(value=SessionIssued() as issued):
            set_session_cookies(response, issued.access_token, issued.refresh_token)
            return SignInResponse(
                message=SIGNED_IN, user=UserResponse.from_entity(issued.user)
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_application_error(
                error=error,
                request=request,
                trace_id=get_trace_id(),
            )


@router.post(
    "/verify-totp",
    response_model=SignInResponse,
    responses={
        400: {"description": "userId or TOTP code missing", "model": ProblemDetails},
        401: {"description": "Invalid TOTP", "model": ProblemDetails},
        404: {"description": "User not found", "model": ProblemDetails},
    },
    summary="Complete TOTP sign-in",
    description="Verify the TOTP code for a challenged sign-in and set the session cookies.",
)
async def verify_totp(
    request: Request,
    response: Response,
    data: VerifyTotpRequest,
    handler: VerifyTotpHandler = Depends(get_verify_totp_handler),
) -> SignInResponse | JSONResponse:
    """Complete a TOTP challenge.

    POST /api/v1/sessions/verify-totp → 200 OK
    """
    command = VerifyTotp(user_id=data.user_id, totp_code=data.totp_code)
    result = await handler.handle(command)

    match result:
        case Success(value=issued):
            set_session_cookies(response, issued.access_token, issued.refresh_token)
            return SignInResponse(
                message=SIGNED_IN, user=UserResponse.from_entity(issued.user)
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_application_error(
                error=error,
                request=request,
                trace_id=get_trace_id(),
            )


@router.post(
    "/refresh-session",
    response_model=MessageResponse,
    responses={
        401: {"description": "Refresh cookie missing, invalid or expired", "model": ProblemDetails},
    },
    summary="Refresh session",
    description="Issue a new access cookie from a valid refresh cookie.",
)
async def refresh_session(
    request: Request,
    response: Response,
    refresh_token: Annotated[str | None, Cookie(alias=REFRESH_TOKEN_COOKIE)] = None,
    handler: RefreshSessionHandler = Depends(get_refresh_session_handler),
) -> MessageResponse | JSONResponse:
    """Refresh the access cookie.

    POST /api/v1/sessions/refresh-session → 200 OK

    The refresh cookie itself is not rotated.
    """
    result = await handler.handle(RefreshSession(refresh_token=refresh_token))

    match result:
        case Success(value=access_token):
            set_access_cookie(response, access_token)
            return MessageResponse(message=SESSION_REFRESHED)
        case Failure(error=error):
            return ErrorResponseBuilder.from_application_error(
                error=error,
                request=request,
                trace_id=get_trace_id(),
            )


@router.delete(
    "",
    response_model=MessageResponse,
    summary="Sign out",
    description="Clear both session cookies. Always succeeds.",
)
async def delete_session(response: Response) -> MessageResponse:
    """Sign out.

    DELETE /api/v1/sessions → 200 OK

    Tokens are stateless; clearing the cookies is the whole operation.
    """
    clear_session_cookies(response)
    return MessageResponse(message=SIGNED_OUT)


@router.get(
    "",
    response_model=UserEnvelope,
    summary="Read session",
    description="Return the signed-in user, or null when there is no valid session.",
)
async def read_session(
    request: Request,
    access_token: Annotated[str | None, Cookie(alias=ACCESS_TOKEN_COOKIE)] = None,
    handler: GetSessionUserHandler = Depends(get_session_user_handler),
) -> UserEnvelope | JSONResponse:
    """Read the current session.

    GET /api/v1/sessions → 200 OK
    """
    result = await handler.handle(GetSessionUser(access_token=access_token))

    match result:
        case Success(value=None):
            return UserEnvelope(user=None)
        case Success(value=user):
            return UserEnvelope(user=UserResponse.from_entity(user))
        case Failure(error=error):
            return ErrorResponseBuilder.from_application_error(
                error=error,
                request=request,
                trace_id=get_trace_id(),
            )
