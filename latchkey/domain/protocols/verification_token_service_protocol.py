"""VerificationTokenServiceProtocol - token value generation port.

Infrastructure provides the concrete implementation
(``latchkey.infrastructure.security.VerificationTokenService``).
"""

from datetime import datetime
from typing import Protocol


class VerificationTokenServiceProtocol(Protocol):
    """Protocol for verification token generation.

    Generates unguessable values for emailed links. Valid for one hour.
    """

    def generate_token(self) -> str:
        """Generate a token value.

        Returns:
            64-character hex string (32 bytes of entropy).
        """
        ...

    def calculate_expiration(self, now: datetime | None = None) -> datetime:
        """Calculate expiration timestamp for a token issued at ``now``."""
        ...
