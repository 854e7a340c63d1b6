"""Session cookie helpers.

Both cookies are HttpOnly. In production they are also Secure and
SameSite=None (the web client runs on another origin); elsewhere they are
SameSite=Lax so plain-HTTP local development works.
"""

from typing import Literal

from fastapi import Response

from latchkey.core.config import settings
from latchkey.core.constants import (
    ACCESS_TOKEN_COOKIE,
    ACCESS_TOKEN_TTL_SECONDS,
    REFRESH_TOKEN_COOKIE,
    REFRESH_TOKEN_TTL_SECONDS,
)


def _cookie_policy() -> tuple[bool, Literal["none", "lax"]]:
    if settings.is_production:
        return True, "none"
    return False, "lax"


def set_access_cookie(response: Response, access_token: str) -> None:
    secure, samesite = _cookie_policy()
    response.set_cookie(
        key=ACCESS_TOKEN_COOKIE,
        value=access_token,
        max_age=ACCESS_TOKEN_TTL_SECONDS,
        httponly=True,
        secure=secure,
        samesite=samesite,
    )


def set_session_cookies(
    response: Response, access_token: str, refresh_token: str
) -> None:
    """Attach both session cookies to ``response``."""
    set_access_cookie(response, access_token)
    secure, samesite = _cookie_policy()
    response.set_cookie(
        key=REFRESH_TOKEN_COOKIE,
        value=refresh_token,
        max_age=REFRESH_TOKEN_TTL_SECONDS,
        httponly=True,
        secure=secure,
        samesite=samesite,
    )


def clear_session_cookies(response: Response) -> None:
    """Expire both session cookies (attributes must match the ones set)."""
    secure, samesite = _cookie_policy()
    for key in (ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE):
        response.delete_cookie(
            key=key, httponly=True, secure=secure, samesite=samesite
        )
