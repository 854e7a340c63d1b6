"""Commands (CQRS write operations).

All commands are immutable (frozen=True) and use keyword-only arguments
(kw_only=True). Field formats are validated by the request schemas before
a command is built; handlers enforce rules that need the database.
"""

from latchkey.application.commands.session_commands import (
    RefreshSession,
    SignIn,
    VerifyTotp,
)
from latchkey.application.commands.user_commands import (
    DeleteAccount,
    RegisterUser,
    UpdateUser,
)
from latchkey.application.commands.verification_commands import (
    ConfirmEmailChange,
    RequestAccountDeletion,
    RequestPasswordReset,
    ResendVerificationEmail,
    ResetPassword,
    SetTotpAuth,
    VerifyAccount,
)

__all__ = [
    "ConfirmEmailChange",
    "DeleteAccount",
    "RefreshSession",
    "RegisterUser",
    "RequestAccountDeletion",
    "RequestPasswordReset",
    "ResendVerificationEmail",
    "ResetPassword",
    "SetTotpAuth",
    "SignIn",
    "UpdateUser",
    "VerifyAccount",
    "VerifyTotp",
]
