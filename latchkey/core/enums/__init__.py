"""Core enums shared across layers."""

from latchkey.core.enums.environment import Environment
from latchkey.core.enums.error_code import ErrorCode

__all__ = ["Environment", "ErrorCode"]
