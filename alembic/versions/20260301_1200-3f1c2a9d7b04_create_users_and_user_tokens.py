"""create_users_and_user_tokens

Revision ID: 3f1c2a9d7b04
Revises:
Create Date: 2026-03-01 12:00:00.000000+00:00

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b04"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users and user_tokens tables."""
    op.create_table(
        "users",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("username", sa.String(length=20), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("email_pending", sa.String(length=255), nullable=True),
        sa.Column("password", sa.String(length=255), nullable=False, comment="Bcrypt hash"),
        sa.Column("role", sa.String(length=10), server_default="user", nullable=False),
        sa.Column(
            "account_verified", sa.Boolean(), server_default=sa.false(), nullable=False
        ),
        sa.Column(
            "totp_auth_on", sa.Boolean(), server_default=sa.false(), nullable=False
        ),
        sa.Column(
            "totp_auth_secret",
            sa.String(length=255),
            nullable=True,
            comment="base64 AES-GCM ciphertext",
        ),
        sa.Column(
            "totp_auth_init_vector",
            sa.String(length=32),
            nullable=True,
            comment="base64 96-bit nonce",
        ),
        sa.Column(
            "totp_auth_tag", sa.String(length=32), nullable=True, comment="base64 GCM tag"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "uq_users_username_lower",
        "users",
        [sa.text("lower(username)")],
        unique=True,
    )
    op.create_index(
        "uq_users_email_lower",
        "users",
        [sa.text("lower(email)")],
        unique=True,
    )

    op.create_table(
        "user_tokens",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column(
            "token_type",
            sa.String(length=32),
            nullable=False,
            comment="account_verification, email_change, password_reset, account_deletion",
        ),
        sa.Column("token_value", sa.String(length=64), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("used_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "token_type", name="uq_user_tokens_user_type"),
    )
    op.create_index(
        "idx_user_tokens_value_type",
        "user_tokens",
        ["token_value", "token_type"],
    )


def downgrade() -> None:
    """Drop user_tokens and users tables."""
    op.drop_index("idx_user_tokens_value_type", table_name="user_tokens")
    op.drop_table("user_tokens")
    op.drop_index("uq_users_email_lower", table_name="users")
    op.drop_index("uq_users_username_lower", table_name="users")
    op.drop_table("users")
