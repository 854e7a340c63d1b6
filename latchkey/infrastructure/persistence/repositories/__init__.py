"""SQLAlchemy repository adapters."""

from latchkey.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)
from latchkey.infrastructure.persistence.repositories.verification_token_repository import (
    VerificationTokenRepository,
)

__all__ = ["UserRepository", "VerificationTokenRepository"]
