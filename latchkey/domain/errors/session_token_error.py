"""Session token errors.

Returned by the session token service when an access or refresh token fails
verification. ``code`` is ``TOKEN_INVALID`` (bad signature, malformed,
unsupported algorithm, wrong token kind) or ``TOKEN_EXPIRED``.
"""

from dataclasses import dataclass

from latchkey.core.errors import AuthenticationError


@dataclass(frozen=True, slots=True, kw_only=True)
class SessionTokenError(AuthenticationError):
    """Access or refresh token rejected."""

    pass
