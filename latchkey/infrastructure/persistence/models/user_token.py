"""Verification token database model.

One row per (user_id, token_type): issuing a new token for the same purpose
overwrites the row instead of appending.

Security:
    - token_value: Random 32-byte hex string (64 characters)
    - expires_at: 1 hour from issue
    - used_at: Set exactly once by the conditional consume update
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from latchkey.infrastructure.persistence.base import BaseModel, IdType


class UserToken(BaseModel):
    """Single-use verification token model."""

    __tablename__ = "user_tokens"

    user_id: Mapped[int] = mapped_column(
        IdType,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    token_type: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        comment="account_verification, email_change, password_reset, account_deletion",
    )
    token_value: Mapped[str] = mapped_column(String(64), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    used_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )

    user = relationship("User", back_populates="tokens")

    __table_args__ = (
        UniqueConstraint("user_id", "token_type", name="uq_user_tokens_user_type"),
        Index("idx_user_tokens_value_type", "token_value", "token_type"),
    )
