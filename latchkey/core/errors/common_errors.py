"""Common error classes used across all layers.

Error Types:
- AuthenticationError: Bad credentials or session token (401)
- UpstreamServiceError: CAPTCHA or email provider failure (500)

Usage:
    return Failure(error=UpstreamServiceError(
        code=ErrorCode.CAPTCHA_UNAVAILABLE,
        message="hCaptcha request timed out",
        service="hcaptcha",
    ))
"""

from dataclasses import dataclass

from latchkey.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthenticationError(DomainError):
    """Authentication failure (invalid credentials, token expired)."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class UpstreamServiceError(DomainError):
    """External collaborator failure (CAPTCHA service, mail server).

    Attributes:
        service: Name of the upstream service.
    """

    service: str
