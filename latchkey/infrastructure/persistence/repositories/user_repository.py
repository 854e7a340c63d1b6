"""UserRepository - SQLAlchemy implementation of the UserRepository protocol.

Maps between domain User entities and the ``users`` table. Methods flush
but never commit; the request-scoped session owns the transaction.
"""

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from latchkey.domain.entities import User
from latchkey.domain.enums import UserRole
from latchkey.domain.value_objects import SecretBundle
from latchkey.infrastructure.persistence.models.user import User as UserModel
from latchkey.infrastructure.persistence.models.user_token import UserToken
from latchkey.infrastructure.persistence.repositories._timestamps import as_utc


class UserRepository:
    """SQLAlchemy adapter for user persistence.

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with database.get_session() as session:
        ...     repo = UserRepository(session)
        ...     user = await repo.find_by_email("ada@example.com")
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, user_id: int) -> User | None:
        """Find user by ID."""
        user_model = await self.session.get(UserModel, user_id)
        if user_model is None:
            return None
        return self._to_domain(user_model)

    async def find_by_email(self, email: str) -> User | None:
        """Find user by email address (case-insensitive exact match)."""
        stmt = select(UserModel).where(func.lower(UserModel.email) == email.lower())
        result = await self.session.execute(stmt)
        user_model = result.scalar_one_or_none()

        if user_model is None:
            return None

        return self._to_domain(user_model)

    async def username_taken(
        self, username: str, exclude_user_id: int | None = None
    ) -> bool:
        """Check whether another user holds ``username`` (case-insensitive)."""
        stmt = select(UserModel.id).where(
            func.lower(UserModel.username) == username.lower()
        )
        if exclude_user_id is not None:
            stmt = stmt.where(UserModel.id != exclude_user_id)
        result = await self.session.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    async def email_taken(
        self, email: str, exclude_user_id: int | None = None
    ) -> bool:
        """Check whether another user holds ``email`` as current or pending address."""
        lowered = email.lower()
        stmt = select(UserModel.id).where(
            or_(
                func.lower(UserModel.email) == lowered,
                func.lower(UserModel.email_pending) == lowered,
            )
        )
        if exclude_user_id is not None:
            stmt = stmt.where(UserModel.id != exclude_user_id)
        result = await self.session.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    async def create(
        self,
        username: str,
        email: str,
        password_hash: str,
        role: UserRole,
    ) -> User:
        """Insert a new unverified user.

        Raises:
            IntegrityError: If username or email collides (race with the
                uniqueness pre-check).
        """
        user_model = UserModel(
            username=username,
            email=email,
            password=password_hash,
            role=role.value,
            account_verified=False,
            totp_auth_on=False,
        )
        self.session.add(user_model)
        await self.session.flush()
        await self.session.refresh(user_model)
        return self._to_domain(user_model)

    async def update(self, user: User) -> None:
        """Persist mutable fields of ``user``.

        Raises:
            NoResultFound: If the user no longer exists.
        """
        stmt = select(UserModel).where(UserModel.id == user.id)
        result = await self.session.execute(stmt)
        user_model = result.scalar_one()

        user_model.username = user.username
        user_model.email = user.email
        user_model.email_pending = user.email_pending
        user_model.password = user.password_hash
        user_model.role = user.role.value
        user_model.account_verified = user.account_verified
        user_model.totp_auth_on = user.totp_auth_on
        if user.totp_secret is None:
            user_model.totp_auth_secret = None
            user_model.totp_auth_init_vector = None
            user_model.totp_auth_tag = None
        else:
            user_model.totp_auth_secret = user.totp_secret.ciphertext
            user_model.totp_auth_init_vector = user.totp_secret.init_vector
            user_model.totp_auth_tag = user.totp_secret.auth_tag

        await self.session.flush()

    async def delete(self, user_id: int) -> None:
        """Delete the user and their verification tokens."""
        await self.session.execute(delete(UserToken).where(UserToken.user_id == user_id))
        await self.session.execute(delete(UserModel).where(UserModel.id == user_id))
        await self.session.flush()

    def _to_domain(self, user_model: UserModel) -> User:
        totp_secret = None
        if (
            user_model.totp_auth_secret is not None
            and user_model.totp_auth_init_vector is not None
            and user_model.totp_auth_tag is not None
        ):
            totp_secret = SecretBundle(
                ciphertext=user_model.totp_auth_secret,
                init_vector=user_model.totp_auth_init_vector,
                auth_tag=user_model.totp_auth_tag,
            )

        return User(
            id=user_model.id,
            username=user_model.username,
            email=user_model.email,
            email_pending=user_model.email_pending,
            password_hash=user_model.password,
            role=UserRole(user_model.role),
            account_verified=user_model.account_verified,
            totp_auth_on=user_model.totp_auth_on,
            totp_secret=totp_secret,
            created_at=as_utc(user_model.created_at),
        )
