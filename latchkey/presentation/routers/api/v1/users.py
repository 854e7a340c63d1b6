"""Users resource router.

Endpoints:
    POST   /api/v1/users          - Register (unverified until the emailed link is used)
    GET    /api/v1/users/{id}     - Read own user
    PATCH  /api/v1/users          - Update own user
    DELETE /api/v1/users?token=   - Delete account with an emailed deletion token
"""

from fastapi import APIRouter, Depends, Path, Query, Request, status
from fastapi.responses import JSONResponse

from latchkey.application.commands import DeleteAccount, RegisterUser, UpdateUser
from latchkey.application.commands.handlers.delete_account_handler import (
    DeleteAccountHandler,
)
from latchkey.application.commands.handlers.register_user_handler import (
    RegisterUserHandler,
)
from latchkey.application.commands.handlers.update_user_handler import (
    UpdateUserHandler,
)
from latchkey.application.queries import GetUser
from latchkey.application.queries.handlers.get_user_handler import GetUserHandler
from latchkey.core.constants import MAX_USER_ID
from latchkey.core.container import (
    get_delete_account_handler,
    get_get_user_handler,
    get_register_user_handler,
    get_update_user_handler,
)
from latchkey.core.result import Failure, Success
from latchkey.domain.enums import UserRole
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
from latchkey.schemas.common_schemas import MessageResponse, UserEnvelope, UserResponse
from latchkey.schemas.user_schemas import (
    UserCreateRequest,
    UserUpdateRequest,
    UserUpdateResponse,
)

REGISTERED = "Registered successfully — please check your email to confirm"
REGISTERED_EMAIL_FAILED = (
    "Registered successfully — the confirmation email could not be sent, "
    "please request a new one"
)
USER_UPDATED = "User updated successfully"
EMAIL_CHANGE_NOTE = " — check email to confirm email change"
EMAIL_CHANGE_FAILED_NOTE = (
    " — the email change confirmation could not be sent, please try again"
)
ACCOUNT_DELETED = "Account deleted successfully"

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageResponse,
    responses={
        201: {"description": "User registered", "model": MessageResponse},
        400: {"description": "Validation failed", "model": ProblemDetails},
    },
    summary="Register user",
    description="Create an unverified user and email an account verification link.",
)
async def create_user(
    request: Request,
    data: UserCreateRequest,
    handler: RegisterUserHandler = Depends(get_register_user_handler),
) -> MessageResponse | JSONResponse:
    """Register a new user.

    POST /api/v1/users → 201 Created
    """
    command = RegisterUser(
        username=data.username,
        email=data.email,
        password=data.password,
        re_entered_password=data.re_entered_password,
        role=UserRole(data.role),
    )
    result = await handler.handle(command)

    match result:
        case Success(value=registered):
            return MessageResponse(
                message=REGISTERED if registered.email_sent else REGISTERED_EMAIL_FAILED
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_application_error(
                error=error,
                request=request,
                trace_id=get_trace_id(),
            )


@router.get(
    "/{user_id}",
    response_model=UserEnvelope,
    responses={
        401: {"description": "Not signed in", "model": ProblemDetails},
        403: {"description": "Session belongs to another user", "model": ProblemDetails},
        404: {"description": "User not found", "model": ProblemDetails},
    },
    summary="Read user",
    description="Return the signed-in user's sanitized record.",
)
async def get_user(
    request: Request,
    user_id: int = Path(..., ge=1, le=MAX_USER_ID, description="User id"),
    claims: TokenClaims = Depends(get_session_claims),
    handler: GetUserHandler = Depends(get_get_user_handler),
) -> UserEnvelope | JSONResponse:
    """Read a user.

    GET /api/v1/users/{user_id} → 200 OK
    """
    ensure_session_owner(claims, user_id)

    result = await handler.handle(GetUser(user_id=user_id))

    match result:
        case Success(value=user):
            return UserEnvelope(user=UserResponse.from_entity(user))
        case Failure(error=error):
            return ErrorResponseBuilder.from_application_error(
                error=error,
                request=request,
                trace_id=get_trace_id(),
            )


@router.patch(
    "",
    response_model=UserUpdateResponse,
    responses={
        400: {"description": "Validation failed or no changes", "model": ProblemDetails},
        401: {"description": "Not signed in", "model": ProblemDetails},
        403: {"description": "Session belongs to another user", "model": ProblemDetails},
        404: {"description": "User not found", "model": ProblemDetails},
    },
    summary="Update user",
    description=(
        "Apply changed fields. A new email address takes effect only after "
        "the link sent to it is used."
    ),
)
async def update_user(
    request: Request,
    data: UserUpdateRequest,
    claims: TokenClaims = Depends(get_session_claims),
    handler: UpdateUserHandler = Depends(get_update_user_handler),
) -> UserUpdateResponse | JSONResponse:
    """Update the signed-in user.

    PATCH /api/v1/users → 200 OK
    """
    ensure_session_owner(claims, data.id)

    command = UpdateUser(
        user_id=data.id,
        username=data.username,
        email=data.email,
        password=data.password,
        re_entered_password=data.re_entered_password,
        role=UserRole(data.role) if data.role is not None else None,
    )
    result = await handler.handle(command)

    match result:
        case Success(value=updated):
            message = USER_UPDATED
            if updated.email_change_requested:
                message += (
                    EMAIL_CHANGE_NOTE if updated.email_sent else EMAIL_CHANGE_FAILED_NOTE
                )
            return UserUpdateResponse(
                message=message,
                successful_updates=updated.successful_updates,
                user=UserResponse.from_entity(updated.user),
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_application_error(
                error=error,
                request=request,
                trace_id=get_trace_id(),
            )


@router.delete(
    "",
    response_model=MessageResponse,
    responses={
        400: {"description": "Invalid or expired token", "model": ProblemDetails},
    },
    summary="Delete account",
    description="Delete the account that the emailed deletion token was issued for.",
)
async def delete_user(
    request: Request,
    token: str = Query("", max_length=128, description="Account deletion token"),
    handler: DeleteAccountHandler = Depends(get_delete_account_handler),
) -> MessageResponse | JSONResponse:
    """Delete an account.

    DELETE /api/v1/users?token=... → 200 OK

    The token is the credential; no session cookie is needed.
    """
    result = await handler.handle(DeleteAccount(token=token))

    match result:
        case Success():
            return MessageResponse(message=ACCOUNT_DELETED)
        case Failure(error=error):
            return ErrorResponseBuilder.from_application_error(
                error=error,
                request=request,
                trace_id=get_trace_id(),
            )
