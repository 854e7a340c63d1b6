"""Bcrypt password hashing service (adapter).

Implements PasswordHashingProtocol structurally.

Security:
    - Bcrypt with cost factor 12 by default (~250ms per hash)
    - Random salt per hash
    - Passwords longer than 72 bytes are rejected upstream by validation
"""

import secrets
from functools import cached_property

import bcrypt


class BcryptPasswordService:
    """Password hashing and verification with bcrypt.

    Usage:
        from latchkey.core.container import get_password_service

        password_service = get_password_service()
        password_hash = password_service.hash_password("Correct-Horse-42!x")
        password_service.verify_password("Correct-Horse-42!x", password_hash)
    """

    def __init__(self, cost_factor: int = 12) -> None:
        """Initialize bcrypt password service.

        Args:
            cost_factor: Bcrypt cost factor. Each +1 doubles computation time.

        Raises:
            ValueError: If cost_factor is below 10 or above 20.
        """
        if cost_factor < 10:
            msg = "Cost factor must be at least 10 for security"
            raise ValueError(msg)
        if cost_factor > 20:
            msg = "Cost factor above 20 is impractically slow"
            raise ValueError(msg)

        self._cost_factor = cost_factor

    @cached_property
    def _placeholder_hash(self) -> bytes:
        return bcrypt.hashpw(
            secrets.token_bytes(16), bcrypt.gensalt(rounds=self._cost_factor)
        )

    def hash_password(self, password: str) -> str:
        """Hash password using bcrypt.

        Returns:
            Hashed password string (bcrypt format: $2b$12$...).
        """
        salt = bcrypt.gensalt(rounds=self._cost_factor)
        password_hash = bcrypt.hashpw(password.encode("utf-8"), salt)
        return password_hash.decode("utf-8")

    def verify_password(self, password: str, password_hash: str | None) -> bool:
        """Verify password against bcrypt hash.

        With ``password_hash=None`` (no such account) the password is still
        checked, against a throwaway hash of the same cost, and False is
        returned.

        Returns:
            True if password matches hash, False otherwise (including
            malformed hashes and over-long passwords).
        """
        try:
            if password_hash is None:
                bcrypt.checkpw(password.encode("utf-8"), self._placeholder_hash)
                return False
            return bcrypt.checkpw(
                password.encode("utf-8"),
                password_hash.encode("utf-8"),
            )
        except (ValueError, AttributeError):
            return False
