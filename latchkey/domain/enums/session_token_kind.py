"""Session token kinds."""

from enum import Enum


class SessionTokenKind(str, Enum):
    """Which signing secret and lifetime a session token uses."""

    ACCESS = "access"
    REFRESH = "refresh"
