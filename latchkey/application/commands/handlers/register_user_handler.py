"""Registration handler.

Flow:
1. Check username and email uniqueness, and password confirmation
   (formats are already validated by the request schema)
2. Hash password
3. Create unverified user
4. Issue account verification token
5. Commit, then email the verification link
6. Return Success(RegisteredUser)

A delivery failure does not undo the registration: the token is kept and
the user can ask for a resend.
"""

from latchkey.application.commands.user_commands import RegisterUser
from latchkey.application.dtos import RegisteredUser
from latchkey.application.errors import (
    ApplicationError,
    ApplicationErrorCode,
    FieldError,
)
from latchkey.application.services import VerificationTokenStore
from latchkey.core.result import Failure, Result, Success
from latchkey.domain.enums import TokenType
from latchkey.domain.protocols import (
    EmailProtocol,
    LoggerProtocol,
    PasswordHashingProtocol,
    UnitOfWorkProtocol,
    UserRepository,
)


class UserValidationError:
    """Field rule messages shared by registration and update."""

    VALIDATION_FAILED = "Validation failed"
    USERNAME_TAKEN = "Username taken"
    EMAIL_TAKEN = "Email address taken"
    PASSWORDS_MUST_MATCH = "Passwords must match"
    PASSWORD_UNCHANGED = "New password same as current password"
    NO_CHANGES = "No changes detected"


def validation_failure(field_errors: list[FieldError]) -> Failure[ApplicationError]:
    """Bundle collected field errors into one 400 failure."""
    return Failure(
        error=ApplicationError(
            code=ApplicationErrorCode.VALIDATION_FAILED,
            message=UserValidationError.VALIDATION_FAILED,
            field_errors=tuple(field_errors),
        )
    )


class RegisterUserHandler:
    """Handler for user registration command."""

    def __init__(
        self,
        user_repo: UserRepository,
        password_service: PasswordHashingProtocol,
        token_store: VerificationTokenStore,
        email_service: EmailProtocol,
        uow: UnitOfWorkProtocol,
        logger: LoggerProtocol,
        front_end_url: str,
    ) -> None:
        """Initialize registration handler with dependencies.

        Args:
            user_repo: User repository for persistence.
            password_service: Password hashing service.
            token_store: Verification token store.
            email_service: Outbound email.
            uow: Transaction boundary shared with the repositories.
            logger: Structured logger.
            front_end_url: Base URL for the emailed verification link.
        """
        self._user_repo = user_repo
        self._password_service = password_service
        self._token_store = token_store
        self._email_service = email_service
        self._uow = uow
        self._logger = logger
        self._front_end_url = front_end_url

    async def handle(self, cmd: RegisterUser) -> Result[RegisteredUser, ApplicationError]:
        """Handle user registration command.

        Returns:
            Success(RegisteredUser) on successful registration.
            Failure(ApplicationError) with every failed field rule.
        """
        # Step 1: Rules that need the database
        field_errors: list[FieldError] = []
        if await self._user_repo.username_taken(cmd.username):
            field_errors.append(
                FieldError(field="username", message=UserValidationError.USERNAME_TAKEN)
            )
        if await self._user_repo.email_taken(cmd.email):
            field_errors.append(
                FieldError(field="email", message=UserValidationError.EMAIL_TAKEN)
            )
        if cmd.password != cmd.re_entered_password:
            field_errors.append(
                FieldError(
                    field="reEnteredPassword",
                    message=UserValidationError.PASSWORDS_MUST_MATCH,
                )
            )
        if field_errors:
            self._logger.info(
                "Registration rejected",
                reasons=[error.message for error in field_errors],
            )
            return validation_failure(field_errors)

        # Steps 2-3: Hash password and create user
        user = await self._user_repo.create(
            username=cmd.username,
            email=cmd.email,
            password_hash=self._password_service.hash_password(cmd.password),
            role=cmd.role,
        )

        # Step 4: Issue verification token
        issued = await self._token_store.issue(user.id, TokenType.ACCOUNT_VERIFICATION)

        # Step 5: Commit before anything leaves the process
        await self._uow.commit()
        self._logger.info("User registered", user_id=user.id, role=user.role.value)

        verification_url = f"{self._front_end_url}/verify-email?token={issued.token_value}"
        match await self._email_service.send_verification_email(
            to_email=user.email,
            username=user.username,
            verification_url=verification_url,
        ):
            case Failure(error=email_error):
                self._logger.error(
                    "Verification email not sent",
                    user_id=user.id,
                    reason=email_error.message,
                )
                email_sent = False
            case Success():
                email_sent = True

        return Success(value=RegisteredUser(user=user, email_sent=email_sent))
