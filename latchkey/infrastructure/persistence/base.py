"""Base model for all database entities.

Provides:
- Integer primary key (BIGINT on PostgreSQL, INTEGER on SQLite so that
  rowid autoincrement works in tests)
- created_at with a database default

Domain entities never inherit from this; repositories map between them.
"""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Integer, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

IdType = BigInteger().with_variant(Integer(), "sqlite")


class BaseModel(DeclarativeBase):
    """Base class for all database models.

    Example:
        class UserModel(BaseModel):
            __tablename__ = "users"
            email: Mapped[str]
            # Has: id, created_at
    """

    __abstract__ = True

    id: Mapped[int] = mapped_column(
        IdType,
        primary_key=True,
        autoincrement=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"
