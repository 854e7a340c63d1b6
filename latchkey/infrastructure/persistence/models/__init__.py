"""SQLAlchemy models.

Import all models here so Alembic autogenerate sees them.
"""

from latchkey.infrastructure.persistence.models.user import User
from latchkey.infrastructure.persistence.models.user_token import UserToken

__all__ = ["User", "UserToken"]
