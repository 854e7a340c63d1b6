"""Application layer error types.

This module defines application-level errors that wrap domain errors and add
the context the presentation layer needs to build a response.

Exports:
    ApplicationErrorCode: Application-level error code enum
    ApplicationError: Application layer error dataclass
    FieldError: One field-level validation message
"""

from dataclasses import dataclass
from enum import Enum

from latchkey.core.errors import DomainError


class ApplicationErrorCode(Enum):
    """Application-level error codes.

    Each code maps to exactly one HTTP status in the presentation layer.

    Examples:
        >>> error = ApplicationError(
        ...     code=ApplicationErrorCode.NOT_FOUND,
        ...     message="User not found",
        ... )
    """

    VALIDATION_FAILED = "validation_failed"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    EXTERNAL_SERVICE_ERROR = "external_service_error"
    INTERNAL_ERROR = "internal_error"


@dataclass(frozen=True, slots=True, kw_only=True)
class FieldError:
    """Validation message attached to a single request field.

    Attributes:
        field: Request field name (as the client sent it).
        message: Human-readable rule violation.
    """

    field: str
    message: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ApplicationError:
    """Application layer error.

    Wraps domain errors with application-specific context. Used by command and
    query handlers to provide structured error information to the presentation
    layer.

    Attributes:
        code: Application error code (from ApplicationErrorCode enum)
        message: Human-readable error message (sent to the client as ``detail``)
        domain_error: Original domain error (if error originated from domain layer)
        details: Additional context as key-value pairs
        field_errors: Every field rule that failed, in request order

    Examples:
        >>> error = ApplicationError(
        ...     code=ApplicationErrorCode.VALIDATION_FAILED,
        ...     message="Validation failed",
        ...     field_errors=(
        ...         FieldError(field="username", message="Username taken"),
        ...     ),
        ... )
    """

    code: ApplicationErrorCode
    message: str
    domain_error: DomainError | None = None
    details: dict[str, str] | None = None
    field_errors: tuple[FieldError, ...] = ()
