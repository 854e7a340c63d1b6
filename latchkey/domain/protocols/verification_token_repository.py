"""VerificationTokenRepository protocol (port).

The repository owns the storage side of the single-use token rules:
replace-on-issue keyed by (user, token_type), and consumption as one
conditional update so two concurrent attempts cannot both succeed.
"""

from datetime import datetime
from typing import Protocol

from latchkey.domain.entities import VerificationToken
from latchkey.domain.enums import TokenType


class VerificationTokenRepository(Protocol):
    """Protocol for verification token persistence."""

    async def upsert(
        self,
        user_id: int,
        token_type: TokenType,
        token_value: str,
        expires_at: datetime,
    ) -> None:
        """Store ``token_value`` as the only token for (user_id, token_type).

        Replaces any prior value and resets ``used_at`` to NULL.
        """
        ...

    async def mark_used(
        self, token_value: str, token_type: TokenType, now: datetime
    ) -> int | None:
        """Atomically consume an active token.

        Sets ``used_at = now`` only where the value and type match, the token
        is unused and ``expires_at > now``.

        Returns:
            Owning user id, or None if no active token matched.
        """
        ...

    async def find_by_value(
        self, token_value: str, token_type: TokenType
    ) -> VerificationToken | None:
        """Look up a token regardless of state (used to classify failures)."""
        ...
