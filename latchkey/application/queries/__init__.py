"""Queries (CQRS read operations)."""

from latchkey.application.queries.session_queries import GetSessionUser
from latchkey.application.queries.user_queries import GetTotpSecret, GetUser

__all__ = ["GetSessionUser", "GetTotpSecret", "GetUser"]
