"""Verification token errors.

The three codes (``VERIFICATION_TOKEN_NOT_FOUND``, ``_EXPIRED``, ``_USED``)
are kept apart for server-side logs only. Clients always receive the same
generic message.
"""

from dataclasses import dataclass

from latchkey.core.errors import DomainError
from latchkey.domain.enums import TokenType


@dataclass(frozen=True, slots=True, kw_only=True)
class VerificationTokenError(DomainError):
    """Verification token could not be consumed.

    Attributes:
        token_type: Purpose the caller tried to consume.
    """

    token_type: TokenType
