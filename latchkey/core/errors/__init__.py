"""Core errors package.

Usage:
    from latchkey.core.errors import DomainError, UpstreamServiceError
"""

from latchkey.core.errors.common_errors import (
    AuthenticationError,
    UpstreamServiceError,
)
from latchkey.core.errors.domain_error import DomainError

__all__ = [
    "DomainError",
    "AuthenticationError",
    "UpstreamServiceError",
]
