"""Cookie session dependencies.

Routes that act on a user id from the body or path require the access
cookie to be present, valid, and issued to that same user.

Usage:
    @router.get("/{user_id}")
    async def get_user(
        user_id: int,
        claims: TokenClaims = Depends(get_session_claims),
    ):
        ensure_session_owner(claims, user_id)
"""

from typing import Annotated

from fastapi import Cookie, Depends, HTTPException, status

from latchkey.core.constants import ACCESS_TOKEN_COOKIE
from latchkey.core.container import get_logger, get_session_token_service
from latchkey.core.result import Failure, Success
from latchkey.domain.enums import SessionTokenKind
from latchkey.domain.protocols import SessionTokenProtocol
from latchkey.domain.value_objects import TokenClaims

AUTHENTICATION_REQUIRED = "Authentication required"
INVALID_SESSION = "Invalid or expired token"
SESSION_MISMATCH = "Unauthorized"


async def get_session_claims(
    session_tokens: Annotated[
        SessionTokenProtocol, Depends(get_session_token_service)
    ],
    access_token: Annotated[str | None, Cookie(alias=ACCESS_TOKEN_COOKIE)] = None,
) -> TokenClaims:
    """Verify the access cookie and return its claims.

    Raises:
        HTTPException 401: Cookie absent, or token invalid or expired.
    """
    if not access_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=AUTHENTICATION_REQUIRED,
        )

    match session_tokens.verify(access_token, SessionTokenKind.ACCESS):
        case Success(value=claims):
            return claims
        case Failure(error=error):
            get_logger().info("Session rejected", reason=error.message)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=INVALID_SESSION,
            )


def ensure_session_owner(claims: TokenClaims, expected_user_id: int) -> None:
    """Require the session subject to be the user being acted on.

    Raises:
        HTTPException 403: Token subject differs from ``expected_user_id``.
    """
    if claims.user_id != expected_user_id:
        get_logger().warning(
            "Session user mismatch",
            session_user_id=claims.user_id,
            target_user_id=expected_user_id,
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=SESSION_MISMATCH,
        )
