"""Domain error types.

Usage:
    from latchkey.domain.errors import SessionTokenError, VerificationTokenError
"""

from latchkey.domain.errors.session_token_error import SessionTokenError
from latchkey.domain.errors.verification_token_error import VerificationTokenError

__all__ = ["SessionTokenError", "VerificationTokenError"]
