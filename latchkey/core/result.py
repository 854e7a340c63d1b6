"""Result types for railway-oriented programming.

Operations that can fail return ``Success`` or ``Failure`` instead of raising,
so every caller handles both branches explicitly.

Usage:
    def decrypt(bundle: SecretBundle) -> Result[str, DecryptionError]:
        try:
            plaintext = ...
        except InvalidTag:
            return Failure(error=DecryptionError(...))
        return Success(value=plaintext)

    match decrypt(bundle):
        case Success(value=secret):
            ...
        case Failure(error=error):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


type Result[T, E] = Success[T] | Failure[E]
