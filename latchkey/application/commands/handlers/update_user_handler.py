"""Update user handler.

Applies only fields that were supplied and differ from the stored value.
All rule violations are collected and reported together; nothing is
written unless every rule passes.

A new email address is not applied directly: it is parked in
``email_pending`` and an ``email_change`` link goes to the new address.
"""

from latchkey.application.commands.handlers.register_user_handler import (
    UserValidationError,
    validation_failure,
)
from latchkey.application.commands.user_commands import UpdateUser
from latchkey.application.dtos import UpdatedUser
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


class UpdateUserHandler:
    """Handler for the UpdateUser command."""

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
        self._user_repo = user_repo
        self._password_service = password_service
        self._token_store = token_store
        self._email_service = email_service
        self._uow = uow
        self._logger = logger
        self._front_end_url = front_end_url

    async def handle(self, cmd: UpdateUser) -> Result[UpdatedUser, ApplicationError]:
        """Handle user update.

        Returns:
            Success(UpdatedUser) listing one message per changed field.
            Failure(ApplicationError): 404 unknown user, 400 with field errors,
            or 400 "No changes detected".
        """
        user = await self._user_repo.find_by_id(cmd.user_id)
        if user is None:
            return Failure(
                error=ApplicationError(
                    code=ApplicationErrorCode.NOT_FOUND,
                    message="User not found",
                )
            )

        field_errors: list[FieldError] = []
        successful_updates: list[str] = []
        new_username: str | None = None
        new_email: str | None = None
        new_password_hash: str | None = None

        if cmd.username is not None and cmd.username != user.username:
            if await self._user_repo.username_taken(cmd.username, exclude_user_id=user.id):
                field_errors.append(
                    FieldError(field="username", message=UserValidationError.USERNAME_TAKEN)
                )
            else:
                new_username = cmd.username
                successful_updates.append("Username updated successfully")

        if cmd.email is not None and cmd.email != user.email:
            if await self._user_repo.email_taken(cmd.email, exclude_user_id=user.id):
                field_errors.append(
                    FieldError(field="email", message=UserValidationError.EMAIL_TAKEN)
                )
            else:
                new_email = cmd.email
                successful_updates.append("Email address update pending email confirmation")

        if cmd.password is not None or cmd.re_entered_password is not None:
            if cmd.password != cmd.re_entered_password:
                field_errors.append(
                    FieldError(
                        field="reEnteredPassword",
                        message=UserValidationError.PASSWORDS_MUST_MATCH,
                    )
                )
            elif cmd.password is not None and self._password_service.verify_password(
                cmd.password, user.password_hash
            ):
                field_errors.append(
                    FieldError(
                        field="password",
                        message=UserValidationError.PASSWORD_UNCHANGED,
                    )
                )
            elif cmd.password is not None:
                new_password_hash = self._password_service.hash_password(cmd.password)
                successful_updates.append("Password updated successfully")

        role_changed = cmd.role is not None and cmd.role != user.role
        if role_changed:
            successful_updates.append("Role updated successfully")

        if field_errors:
            self._logger.info(
                "User update rejected",
                user_id=user.id,
                reasons=[error.message for error in field_errors],
            )
            return validation_failure(field_errors)

        if not successful_updates:
            return Failure(
                error=ApplicationError(
                    code=ApplicationErrorCode.VALIDATION_FAILED,
                    message=UserValidationError.NO_CHANGES,
                )
            )

        if new_username is not None:
            user.username = new_username
        if new_password_hash is not None:
            user.password_hash = new_password_hash
        if role_changed and cmd.role is not None:
            user.role = cmd.role
        if new_email is not None:
            user.request_email_change(new_email)

        await self._user_repo.update(user)

        issued = None
        if new_email is not None:
            issued = await self._token_store.issue(user.id, TokenType.EMAIL_CHANGE)

        await self._uow.commit()
        self._logger.info(
            "User updated",
            user_id=user.id,
            updates=len(successful_updates),
            email_change_requested=new_email is not None,
        )

        email_sent = True
        if new_email is not None and issued is not None:
            confirm_url = f"{self._front_end_url}/change-email?token={issued.token_value}"
            match await self._email_service.send_email_change_email(
                to_email=new_email,
                username=user.username,
                confirm_url=confirm_url,
            ):
                case Failure(error=email_error):
                    self._logger.error(
                        "Email change confirmation not sent",
                        user_id=user.id,
                        reason=email_error.message,
                    )
                    email_sent = False

        return Success(
            value=UpdatedUser(
                user=user,
                successful_updates=successful_updates,
                email_change_requested=new_email is not None,
                email_sent=email_sent,
            )
        )
