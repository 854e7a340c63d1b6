"""User domain entity.

Pure business logic, no framework dependencies.

Lifecycle:
    - Created unverified at registration
    - ``account_verified`` flips true once, through an account verification token
    - ``email`` changes only by confirming ``email_pending``
    - TOTP secret is present only while ``totp_auth_on`` is true
"""

from dataclasses import dataclass
from datetime import datetime

from latchkey.domain.enums import UserRole
from latchkey.domain.value_objects import SecretBundle


@dataclass
class User:
    """User domain entity.

    Attributes:
        id: Numeric identifier assigned by the store (immutable).
        username: Unique, case-insensitive handle.
        email: Unique, case-insensitive address.
        email_pending: Requested new address awaiting confirmation.
        password_hash: Bcrypt hash (never plaintext).
        role: ``admin`` or ``user``.
        account_verified: Email ownership confirmed.
        totp_auth_on: Two-factor authentication enabled.
        totp_secret: Encrypted TOTP secret (None unless totp_auth_on).
        created_at: Registration timestamp.

    Example:
        >>> user = User(
        ...     id=1,
        ...     username="ada",
        ...     email="ada@example.com",
        ...     password_hash="$2b$12$...",
        ...     created_at=datetime.now(UTC),
        ... )
        >>> user.can_sign_in()
        False
    """

    id: int
    username: str
    email: str
    password_hash: str
    created_at: datetime
    role: UserRole = UserRole.USER
    email_pending: str | None = None
    account_verified: bool = False
    totp_auth_on: bool = False
    totp_secret: SecretBundle | None = None

    def can_sign_in(self) -> bool:
        """Unverified accounts may not start a session."""
        return self.account_verified

    def requires_totp(self) -> bool:
        """Sign-in must pause for a TOTP code."""
        return self.totp_auth_on and self.totp_secret is not None

    def mark_verified(self) -> None:
        """Record confirmed email ownership."""
        self.account_verified = True

    def request_email_change(self, new_email: str) -> None:
        """Park a new address until its owner confirms it."""
        self.email_pending = new_email

    def confirm_email_change(self) -> str:
        """Promote the pending address.

        Returns:
            The address that was replaced.

        Raises:
            ValueError: If no change is pending.
        """
        if self.email_pending is None:
            raise ValueError("No pending email change")
        old_email = self.email
        self.email = self.email_pending
        self.email_pending = None
        return old_email

    def enable_totp(self, secret: SecretBundle) -> None:
        """Store an encrypted, already-confirmed TOTP secret."""
        self.totp_secret = secret
        self.totp_auth_on = True

    def disable_totp(self) -> None:
        """Clear the TOTP secret fields."""
        self.totp_secret = None
        self.totp_auth_on = False
