"""Domain entities."""

from latchkey.domain.entities.user import User
from latchkey.domain.entities.verification_token import IssuedToken, VerificationToken

__all__ = ["IssuedToken", "User", "VerificationToken"]
