"""Verified session token claims."""

from dataclasses import dataclass
from datetime import datetime

from latchkey.domain.enums import SessionTokenKind


@dataclass(frozen=True, slots=True, kw_only=True)
class TokenClaims:
    """Claims extracted from a verified access or refresh token.

    Attributes:
        user_id: Subject of the token.
        kind: Access or refresh.
        issued_at: ``iat`` claim.
        expires_at: ``exp`` claim.
        token_id: ``jti`` claim.
    """

    user_id: int
    kind: SessionTokenKind
    issued_at: datetime
    expires_at: datetime
    token_id: str
