"""API v1 routers.

Resources:
    /api/v1/sessions       - Sign in, TOTP completion, refresh, sign out
    /api/v1/users          - Registration and own-account management
    /api/v1/verifications  - Emailed-link flows and TOTP enrollment
"""

from fastapi import APIRouter

from latchkey.core.config import settings
from latchkey.presentation.routers.api.v1.sessions import router as sessions_router
from latchkey.presentation.routers.api.v1.users import router as users_router
from latchkey.presentation.routers.api.v1.verifications import (
    router as verifications_router,
)

v1_router = APIRouter(prefix=settings.api_v1_prefix)
v1_router.include_router(sessions_router)
v1_router.include_router(users_router)
v1_router.include_router(verifications_router)

__all__ = [
    "v1_router",
]
