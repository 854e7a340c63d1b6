"""Unit of work protocol (port).

Satisfied structurally by SQLAlchemy's ``AsyncSession``. Handlers commit
once a guarded mutation is complete (before any email goes out) and roll
back when they reject a request after staging writes. The request-scoped
session commits whatever remains when the request completes.
"""

from typing import Protocol


class UnitOfWorkProtocol(Protocol):
    """Transaction boundary shared by the repositories of one request."""

    async def commit(self) -> None:
        """Commit staged writes."""
        ...

    async def rollback(self) -> None:
        """Discard staged writes."""
        ...
