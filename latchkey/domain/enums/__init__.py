"""Domain enums."""

from latchkey.domain.enums.session_token_kind import SessionTokenKind
from latchkey.domain.enums.token_type import TokenType
from latchkey.domain.enums.user_role import UserRole

__all__ = ["SessionTokenKind", "TokenType", "UserRole"]
