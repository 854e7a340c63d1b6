"""VerificationTokenRepository - SQLAlchemy implementation.

Race safety:
    - ``upsert`` is a native INSERT ... ON CONFLICT (user_id, token_type)
      DO UPDATE, so re-issuing never appends a second row.
    - ``mark_used`` is a single conditional UPDATE ... RETURNING. Two
      concurrent consumers of one token cannot both match ``used_at IS NULL``.
"""

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from latchkey.domain.entities import VerificationToken
from latchkey.domain.enums import TokenType
from latchkey.infrastructure.persistence.models.user_token import UserToken
from latchkey.infrastructure.persistence.repositories._timestamps import as_utc


class VerificationTokenRepository:
    """SQLAlchemy adapter for verification tokens.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def upsert(
        self,
        user_id: int,
        token_type: TokenType,
        token_value: str,
        expires_at: datetime,
    ) -> None:
        """Store ``token_value`` as the only token for (user_id, token_type)."""
        now = datetime.now(expires_at.tzinfo)
        insert = (
            sqlite_insert
            if self.session.get_bind().dialect.name == "sqlite"
            else postgresql_insert
        )
        stmt = insert(UserToken).values(
            user_id=user_id,
            token_type=token_type.value,
            token_value=token_value,
            expires_at=expires_at,
            created_at=now,
            used_at=None,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[UserToken.user_id, UserToken.token_type],
            set_={
                "token_value": stmt.excluded.token_value,
                "expires_at": stmt.excluded.expires_at,
                "created_at": stmt.excluded.created_at,
                "used_at": None,
            },
        )
        await self.session.execute(stmt)

    async def mark_used(
        self, token_value: str, token_type: TokenType, now: datetime
    ) -> int | None:
        """Atomically consume an active token.

        Returns:
            Owning user id, or None if no unused, unexpired token matched.
        """
        stmt = (
            update(UserToken)
            .where(
                UserToken.token_value == token_value,
                UserToken.token_type == token_type.value,
                UserToken.used_at.is_(None),
                UserToken.expires_at > now,
            )
            .values(used_at=now)
            .returning(UserToken.user_id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_by_value(
        self, token_value: str, token_type: TokenType
    ) -> VerificationToken | None:
        """Look up a token regardless of state."""
        stmt = select(UserToken).where(
            UserToken.token_value == token_value,
            UserToken.token_type == token_type.value,
        )
        result = await self.session.execute(stmt)
        token_model = result.scalar_one_or_none()
        if token_model is None:
            return None
        return self._to_domain(token_model)

    def _to_domain(self, token_model: UserToken) -> VerificationToken:
        return VerificationToken(
            user_id=token_model.user_id,
            token_type=TokenType(token_model.token_type),
            token_value=token_model.token_value,
            expires_at=as_utc(token_model.expires_at),
            created_at=as_utc(token_model.created_at),
            used_at=as_utc(token_model.used_at) if token_model.used_at else None,
        )
