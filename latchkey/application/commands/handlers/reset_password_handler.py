"""Reset password handler.

Flow:
1. All three fields present
2. New password meets the strength rules
3. Consume the ``password_reset`` token
4. Token owner's email matches the submitted address (else roll back)
5. Store the new hash and commit
"""

from latchkey.application.commands.verification_commands import ResetPassword
from latchkey.application.errors import (
    ApplicationError,
    ApplicationErrorCode,
    FieldError,
)
from latchkey.application.services import VerificationTokenStore
from latchkey.core.result import Failure, Result, Success
from latchkey.domain.enums import TokenType
from latchkey.domain.protocols import (
    LoggerProtocol,
    PasswordHashingProtocol,
    UnitOfWorkProtocol,
    UserRepository,
)
from latchkey.domain.validators import validate_password


class ResetPasswordError:
    """Password reset error messages."""

    MISSING_FIELDS = "Token, email address and new password required"
    INVALID_TOKEN_OR_EMAIL = "Invalid/expired token or invalid email address"


class ResetPasswordHandler:
    """Handler for the ResetPassword command."""

    def __init__(
        self,
        user_repo: UserRepository,
        password_service: PasswordHashingProtocol,
        token_store: VerificationTokenStore,
        uow: UnitOfWorkProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._password_service = password_service
        self._token_store = token_store
        self._uow = uow
        self._logger = logger

    async def handle(self, cmd: ResetPassword) -> Result[int, ApplicationError]:
        """Return Success(user_id) once the new password is stored."""
        # Step 1: Required fields
        if not cmd.email or not cmd.new_password or not cmd.token:
            return Failure(
                error=ApplicationError(
                    code=ApplicationErrorCode.VALIDATION_FAILED,
                    message=ResetPasswordError.MISSING_FIELDS,
                )
            )

        # Step 2: Password strength
        try:
            validate_password(cmd.new_password)
        except ValueError as e:
            return Failure(
                error=ApplicationError(
                    code=ApplicationErrorCode.VALIDATION_FAILED,
                    message=str(e),
                    field_errors=(FieldError(field="newPassword", message=str(e)),),
                )
            )

        invalid = Failure(
            error=ApplicationError(
                code=ApplicationErrorCode.VALIDATION_FAILED,
                message=ResetPasswordError.INVALID_TOKEN_OR_EMAIL,
            )
        )

        # Step 3: Consume token
        match await self._token_store.consume(cmd.token, TokenType.PASSWORD_RESET):
            case Failure():
                return invalid
            case Success(value=user_id):
                pass

        # Step 4: Token owner matches submitted address
        user = await self._user_repo.find_by_id(user_id)
        if user is None or user.email.lower() != cmd.email.lower():
            await self._uow.rollback()
            self._logger.warning(
                "Password reset email does not match token owner", user_id=user_id
            )
            return invalid

        # Step 5: Store new hash
        user.password_hash = self._password_service.hash_password(cmd.new_password)
        await self._user_repo.update(user)
        await self._uow.commit()

        self._logger.info("Password reset", user_id=user.id)
        return Success(value=user.id)
