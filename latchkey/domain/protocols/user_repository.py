"""UserRepository protocol for user persistence.

Port (interface) for hexagonal architecture. Implementations stage changes
in the caller's transaction and never commit on their own, so a repository
write and a verification token consumption can succeed or fail together.
"""

from typing import Protocol

from latchkey.domain.entities import User
from latchkey.domain.enums import UserRole


class UserRepository(Protocol):
    """User repository protocol (port).

    Methods:
        find_by_id: Retrieve user by ID
        find_by_email: Retrieve user by email (case-insensitive)
        username_taken / email_taken: Uniqueness checks
        create: Insert a new unverified user
        update: Persist changed fields
        delete: Remove the user (tokens cascade)
    """

    async def find_by_id(self, user_id: int) -> User | None:
        """Find user by ID."""
        ...

    async def find_by_email(self, email: str) -> User | None:
        """Find user by email address (case-insensitive)."""
        ...

    async def username_taken(
        self, username: str, exclude_user_id: int | None = None
    ) -> bool:
        """Check whether another user already holds ``username``."""
        ...

    async def email_taken(
        self, email: str, exclude_user_id: int | None = None
    ) -> bool:
        """Check whether another user already holds ``email``.

        Pending addresses count as taken so two users cannot race for the
        same new address.
        """
        ...

    async def create(
        self,
        username: str,
        email: str,
        password_hash: str,
        role: UserRole,
    ) -> User:
        """Insert a new unverified user and return it with its assigned id."""
        ...

    async def update(self, user: User) -> None:
        """Persist mutable fields of ``user``."""
        ...

    async def delete(self, user_id: int) -> None:
        """Delete the user record."""
        ...
