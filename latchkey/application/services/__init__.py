"""Application services shared by several handlers."""

from latchkey.application.services.verification_token_store import (
    VerificationTokenStore,
)

__all__ = ["VerificationTokenStore"]
