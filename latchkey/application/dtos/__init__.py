"""Result DTOs returned by command and query handlers."""

from latchkey.application.dtos.session_dtos import SessionIssued, TotpChallenge
from latchkey.application.dtos.user_dtos import (
    RegisteredUser,
    TotpProvisioning,
    UpdatedUser,
)

__all__ = [
    "RegisteredUser",
    "SessionIssued",
    "TotpChallenge",
    "TotpProvisioning",
    "UpdatedUser",
]
