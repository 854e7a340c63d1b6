"""User database model.

Fields:
    id, created_at: From BaseModel
    username: Unique (case-insensitive via lower() index)
    email: Unique (case-insensitive via lower() index)
    email_pending: Requested new address awaiting confirmation
    password: Bcrypt hash (NEVER plaintext)
    role: 'admin' or 'user'
    account_verified: Email ownership confirmed
    totp_auth_on: Two-factor enabled
    totp_auth_secret / totp_auth_init_vector / totp_auth_tag: AES-GCM bundle
"""

from sqlalchemy import Boolean, Index, String, false, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from latchkey.infrastructure.persistence.base import BaseModel


class User(BaseModel):
    """User model."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(20), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    email_pending: Mapped[str | None] = mapped_column(String(255), nullable=True)
    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hash",
    )
    role: Mapped[str] = mapped_column(
        String(10), nullable=False, default="user", server_default="user"
    )
    account_verified: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    totp_auth_on: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    totp_auth_secret: Mapped[str | None] = mapped_column(
        String(255), nullable=True, comment="base64 AES-GCM ciphertext"
    )
    totp_auth_init_vector: Mapped[str | None] = mapped_column(
        String(32), nullable=True, comment="base64 96-bit nonce"
    )
    totp_auth_tag: Mapped[str | None] = mapped_column(
        String(32), nullable=True, comment="base64 GCM tag"
    )

    tokens = relationship(
        "UserToken",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


# Case-insensitive uniqueness
Index("uq_users_username_lower", func.lower(User.username), unique=True)
Index("uq_users_email_lower", func.lower(User.email), unique=True)
