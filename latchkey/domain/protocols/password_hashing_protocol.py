"""Password hashing protocol (port)."""

from typing import Protocol


class PasswordHashingProtocol(Protocol):
    """Slow adaptive password hashing.

    Implementations must use a salted, irreversible hash with a cost factor
    of at least 12.
    """

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password for storage."""
        ...

    def verify_password(self, password: str, password_hash: str | None) -> bool:
        """Check a plaintext password against a stored hash.

        Returns False (never raises) for malformed hashes. A ``None`` hash
        still costs one full hash comparison and returns False.
        """
        ...
