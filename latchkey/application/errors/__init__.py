"""Application layer errors.

Exports:
    ApplicationError: Application layer error dataclass
    ApplicationErrorCode: Application-level error code enum
    FieldError: Per-field validation message
"""

from latchkey.application.errors.application_error import (
    ApplicationError,
    ApplicationErrorCode,
    FieldError,
)

__all__ = ["ApplicationError", "ApplicationErrorCode", "FieldError"]
