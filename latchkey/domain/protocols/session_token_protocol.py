"""Session token protocol (port).

Access and refresh tokens are stateless signed assertions of a user id.
They are signed with different secrets so neither can stand in for the
other.
"""

from typing import Protocol

from latchkey.core.result import Result
from latchkey.domain.enums import SessionTokenKind
from latchkey.domain.errors import SessionTokenError
from latchkey.domain.value_objects import TokenClaims


class SessionTokenProtocol(Protocol):
    """Issue and verify access/refresh tokens."""

    def issue_access_token(self, user_id: int) -> str:
        """Issue a 1-hour access token."""
        ...

    def issue_refresh_token(self, user_id: int) -> str:
        """Issue a 7-day refresh token."""
        ...

    def verify(
        self, token: str, kind: SessionTokenKind
    ) -> Result[TokenClaims, SessionTokenError]:
        """Verify a token against the secret for ``kind``."""
        ...
