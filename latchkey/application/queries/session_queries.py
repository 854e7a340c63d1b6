"""Session queries."""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class GetSessionUser:
    """Resolve the user behind an access cookie.

    Attributes:
        access_token: Raw access cookie value (None when absent).
    """

    access_token: str | None
