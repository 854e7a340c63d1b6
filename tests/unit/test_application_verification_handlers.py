"""Unit tests for the emailed-link and TOTP enrollment handlers.

Tests cover:
- Password reset field checks, token/email mismatch rollback
- Email change confirmation (swap, conflict, old-address notice)
- Enumeration-safe resend and reset requests
- Account deletion request delivery failure
- TOTP enable/disable
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, Mock

import pytest

from latchkey.application.commands.handlers.confirm_email_change_handler import (
    ConfirmEmailChangeHandler,
)
from latchkey.application.commands.handlers.request_account_deletion_handler import (
    RequestAccountDeletionHandler,
)
from latchkey.application.commands.handlers.request_password_reset_handler import (
    RequestPasswordResetHandler,
)
from latchkey.application.commands.handlers.resend_verification_email_handler import (
    ResendVerificationEmailHandler,
)
from latchkey.application.commands.handlers.reset_password_handler import (
    ResetPasswordError,
    ResetPasswordHandler,
)
from latchkey.application.commands.handlers.set_totp_auth_handler import (
    SetTotpAuthError,
    SetTotpAuthHandler,
)
from latchkey.application.commands.handlers.verify_account_handler import (
    VerifyAccountHandler,
)
from latchkey.application.commands.verification_commands import (
    ConfirmEmailChange,
    RequestAccountDeletion,
    RequestPasswordReset,
    ResendVerificationEmail,
    ResetPassword,
    SetTotpAuth,
    VerifyAccount,
)
from latchkey.application.errors import ApplicationErrorCode
from latchkey.core.enums import ErrorCode
from latchkey.core.result import Failure, Success
from latchkey.domain.entities import IssuedToken
from latchkey.domain.enums import TokenType
from latchkey.domain.errors import VerificationTokenError
from latchkey.domain.protocols import EmailDeliveryError
from latchkey.domain.value_objects import SecretBundle
from tests.conftest import STRONG_PASSWORD, make_user

FRONT_END_URL = "http://localhost:5173"
TOKEN_VALUE = "cd" * 32
BUNDLE = SecretBundle(ciphertext="Y2lwaGVy", init_vector="aXY=", auth_tag="dGFn")


def _token_store(consumed=None) -> AsyncMock:
    store = AsyncMock()
    store.issue.return_value = IssuedToken(
        token_value=TOKEN_VALUE, expires_at=datetime.now(UTC) + timedelta(hours=1)
    )
    store.consume.return_value = consumed if consumed is not None else Success(value=1)
    return store


def _rejected(token_type: TokenType) -> Failure:
    return Failure(
        error=VerificationTokenError(
            code=ErrorCode.VERIFICATION_TOKEN_EXPIRED,
            message="Invalid or expired token",
            token_type=token_type,
        )
    )


def _user_repo(user=None) -> AsyncMock:
    repo = AsyncMock()
    repo.find_by_id.return_value = user
    repo.find_by_email.return_value = user
    repo.email_taken.return_value = False
    return repo


def _email_service(delivered: bool = True) -> AsyncMock:
    service = AsyncMock()
    outcome = (
        Success(value=None)
        if delivered
        else Failure(
            error=EmailDeliveryError(
                code=ErrorCode.EMAIL_DELIVERY_FAILED,
                message="SMTP unavailable",
                service="smtp",
            )
        )
    )
    for name in (
        "send_verification_email",
        "send_email_change_email",
        "send_email_removed_notification",
        "send_password_reset_email",
        "send_account_deletion_email",
    ):
        getattr(service, name).return_value = outcome
    return service


@pytest.mark.unit
class TestVerifyAccountHandler:
    async def test_marks_user_verified(self):
        user = make_user(account_verified=False)
        repo = _user_repo(user)
        uow = AsyncMock()
        handler = VerifyAccountHandler(
            user_repo=repo, token_store=_token_store(), uow=uow, logger=Mock()
        )

        result = await handler.handle(VerifyAccount(token=TOKEN_VALUE))

        assert result == Success(value=1)
        assert user.account_verified is True
        repo.update.assert_awaited_once_with(user)
        uow.commit.assert_awaited_once()

    async def test_rejected_token(self):
        handler = VerifyAccountHandler(
            user_repo=_user_repo(make_user()),
            token_store=_token_store(_rejected(TokenType.ACCOUNT_VERIFICATION)),
            uow=AsyncMock(),
            logger=Mock(),
        )

        result = await handler.handle(VerifyAccount(token=TOKEN_VALUE))

        assert isinstance(result, Failure)
        assert result.error.message == "Invalid or expired token"


@pytest.mark.unit
class TestConfirmEmailChangeHandler:
    def _handler(self, repo, email_service=None, uow=None):
        return ConfirmEmailChangeHandler(
            user_repo=repo,
            token_store=_token_store(),
            email_service=email_service or _email_service(),
            uow=uow or AsyncMock(),
            logger=Mock(),
        )

    async def test_swaps_address_and_notifies_old_one(self):
        user = make_user(email_pending="countess@example.com")
        email_service = _email_service()

        result = await self._handler(_user_repo(user), email_service).handle(
            ConfirmEmailChange(token=TOKEN_VALUE)
        )

        assert isinstance(result, Success)
        assert user.email == "countess@example.com"
        assert user.email_pending is None
        email_service.send_email_removed_notification.assert_awaited_once_with(
            to_email="ada@example.com", username="ada_lovelace"
        )

    async def test_no_pending_address_rolls_back(self):
        uow = AsyncMock()

        result = await self._handler(_user_repo(make_user()), uow=uow).handle(
            ConfirmEmailChange(token=TOKEN_VALUE)
        )

        assert isinstance(result, Failure)
        uow.rollback.assert_awaited_once()
        uow.commit.assert_not_awaited()

    async def test_pending_address_claimed_meanwhile_conflicts(self):
        user = make_user(email_pending="countess@example.com")
        repo = _user_repo(user)
        repo.email_taken.return_value = True
        uow = AsyncMock()

        result = await self._handler(repo, uow=uow).handle(
            ConfirmEmailChange(token=TOKEN_VALUE)
        )

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.CONFLICT
        assert user.email == "ada@example.com"
        uow.rollback.assert_awaited_once()

    async def test_notice_failure_does_not_undo_change(self):
        user = make_user(email_pending="countess@example.com")

        result = await self._handler(
            _user_repo(user), email_service=_email_service(delivered=False)
        ).handle(ConfirmEmailChange(token=TOKEN_VALUE))

        assert isinstance(result, Success)
        assert user.email == "countess@example.com"


@pytest.mark.unit
class TestEnumerationSafeRequests:
    """Unknown addresses get the same success as known ones."""

    async def test_resend_for_unknown_address(self):
        store = _token_store()
        handler = ResendVerificationEmailHandler(
            user_repo=_user_repo(None),
            token_store=store,
            email_service=_email_service(),
            uow=AsyncMock(),
            logger=Mock(),
            front_end_url=FRONT_END_URL,
        )

        result = await handler.handle(ResendVerificationEmail(email="nobody@example.com"))

        assert result == Success(value=None)
        store.issue.assert_not_awaited()

    async def test_resend_for_verified_account_sends_nothing(self):
        email_service = _email_service()
        handler = ResendVerificationEmailHandler(
            user_repo=_user_repo(make_user(account_verified=True)),
            token_store=_token_store(),
            email_service=email_service,
            uow=AsyncMock(),
            logger=Mock(),
            front_end_url=FRONT_END_URL,
        )

        result = await handler.handle(ResendVerificationEmail(email="ada@example.com"))

        assert result == Success(value=None)
        email_service.send_verification_email.assert_not_awaited()

    async def test_resend_for_unverified_account(self):
        email_service = _email_service()
        store = _token_store()
        handler = ResendVerificationEmailHandler(
            user_repo=_user_repo(make_user(account_verified=False)),
            token_store=store,
            email_service=email_service,
            uow=AsyncMock(),
            logger=Mock(),
            front_end_url=FRONT_END_URL,
        )

        await handler.handle(ResendVerificationEmail(email="ada@example.com"))

        store.issue.assert_awaited_once_with(1, TokenType.ACCOUNT_VERIFICATION)
        email_service.send_verification_email.assert_awaited_once_with(
            to_email="ada@example.com",
            username="ada_lovelace",
            verification_url=f"{FRONT_END_URL}/verify-email?token={TOKEN_VALUE}",
        )

    async def test_password_reset_request_delivery_failure_still_succeeds(self):
        handler = RequestPasswordResetHandler(
            user_repo=_user_repo(make_user()),
            token_store=_token_store(),
            email_service=_email_service(delivered=False),
            uow=AsyncMock(),
            logger=Mock(),
            front_end_url=FRONT_END_URL,
        )

        result = await handler.handle(RequestPasswordReset(email="ada@example.com"))

        assert result == Success(value=None)


@pytest.mark.unit
class TestResetPasswordHandler:
    def _handler(self, user, consumed=None, uow=None):
        password_service = Mock()
        password_service.hash_password.return_value = "$2b$10$reset"
        return ResetPasswordHandler(
            user_repo=_user_repo(user),
            password_service=password_service,
            token_store=_token_store(consumed),
            uow=uow or AsyncMock(),
            logger=Mock(),
        )

    @pytest.mark.parametrize(
        "fields",
        [
            {"email": None, "new_password": STRONG_PASSWORD, "token": TOKEN_VALUE},
            {"email": "ada@example.com", "new_password": "", "token": TOKEN_VALUE},
            {"email": "ada@example.com", "new_password": STRONG_PASSWORD, "token": None},
        ],
    )
    async def test_missing_fields(self, fields):
        result = await self._handler(make_user()).handle(ResetPassword(**fields))

        assert isinstance(result, Failure)
        assert result.error.message == ResetPasswordError.MISSING_FIELDS

    async def test_weak_password(self):
        result = await self._handler(make_user()).handle(
            ResetPassword(email="ada@example.com", new_password="weak", token=TOKEN_VALUE)
        )

        assert isinstance(result, Failure)
        assert result.error.field_errors[0].field == "newPassword"

    async def test_email_mismatch_rolls_back_token(self):
        uow = AsyncMock()

        result = await self._handler(make_user(), uow=uow).handle(
            ResetPassword(
                email="someone@example.com",
                new_password=STRONG_PASSWORD,
                token=TOKEN_VALUE,
            )
        )

        assert isinstance(result, Failure)
        assert result.error.message == ResetPasswordError.INVALID_TOKEN_OR_EMAIL
        uow.rollback.assert_awaited_once()
        uow.commit.assert_not_awaited()

    async def test_rejected_token(self):
        result = await self._handler(
            make_user(), consumed=_rejected(TokenType.PASSWORD_RESET)
        ).handle(
            ResetPassword(
                email="ada@example.com", new_password=STRONG_PASSWORD, token=TOKEN_VALUE
            )
        )

        assert isinstance(result, Failure)
        assert result.error.message == ResetPasswordError.INVALID_TOKEN_OR_EMAIL

    async def test_success_matches_email_case_insensitively(self):
        user = make_user()

        result = await self._handler(user).handle(
            ResetPassword(
                email="ADA@example.com", new_password=STRONG_PASSWORD, token=TOKEN_VALUE
            )
        )

        assert result == Success(value=1)
        assert user.password_hash == "$2b$10$reset"


@pytest.mark.unit
class TestRequestAccountDeletionHandler:
    async def test_delivery_failure_is_reported(self):
        handler = RequestAccountDeletionHandler(
            user_repo=_user_repo(make_user()),
            token_store=_token_store(),
            email_service=_email_service(delivered=False),
            uow=AsyncMock(),
            logger=Mock(),
            front_end_url=FRONT_END_URL,
        )

        result = await handler.handle(RequestAccountDeletion(user_id=1))

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.EXTERNAL_SERVICE_ERROR

    async def test_sends_delete_link(self):
        email_service = _email_service()
        handler = RequestAccountDeletionHandler(
            user_repo=_user_repo(make_user()),
            token_store=_token_store(),
            email_service=email_service,
            uow=AsyncMock(),
            logger=Mock(),
            front_end_url=FRONT_END_URL,
        )

        result = await handler.handle(RequestAccountDeletion(user_id=1))

        assert result == Success(value=None)
        email_service.send_account_deletion_email.assert_awaited_once_with(
            to_email="ada@example.com",
            username="ada_lovelace",
            delete_url=f"{FRONT_END_URL}/delete-account?token={TOKEN_VALUE}",
        )


@pytest.mark.unit
class TestSetTotpAuthHandler:
    def _handler(self, user, code_ok=True, encrypted=None):
        totp = Mock()
        totp.verify_code.return_value = code_ok
        codec = Mock()
        codec.encrypt.return_value = (
            encrypted if encrypted is not None else Success(value=BUNDLE)
        )
        return SetTotpAuthHandler(
            user_repo=_user_repo(user),
            secret_codec=codec,
            totp_service=totp,
            uow=AsyncMock(),
            logger=Mock(),
        )

    async def test_disable_needs_no_code(self):
        user = make_user(totp_auth_on=True, totp_secret=BUNDLE)

        result = await self._handler(user).handle(SetTotpAuth(user_id=1, totp_auth_on=False))

        assert result == Success(value=False)
        assert user.totp_secret is None

    async def test_enable_requires_secret_and_code(self):
        result = await self._handler(make_user()).handle(
            SetTotpAuth(user_id=1, totp_auth_on=True, totp_secret="JBSWY3DPEHPK3PXP")
        )

        assert isinstance(result, Failure)
        assert result.error.message == SetTotpAuthError.MISSING_FIELDS

    async def test_enable_rejects_wrong_code(self):
        user = make_user()

        result = await self._handler(user, code_ok=False).handle(
            SetTotpAuth(
                user_id=1,
                totp_auth_on=True,
                totp_secret="JBSWY3DPEHPK3PXP",
                totp_code="000000",
            )
        )

        assert isinstance(result, Failure)
        assert result.error.message == SetTotpAuthError.INVALID_CODE
        assert user.totp_auth_on is False

    async def test_enable_stores_encrypted_secret(self):
        user = make_user()

        result = await self._handler(user).handle(
            SetTotpAuth(
                user_id=1,
                totp_auth_on=True,
                totp_secret="JBSWY3DPEHPK3PXP",
                totp_code="123456",
            )
        )

        assert result == Success(value=True)
        assert user.totp_auth_on is True
        assert user.totp_secret == BUNDLE

    async def test_unknown_user(self):
        result = await self._handler(None).handle(SetTotpAuth(user_id=9, totp_auth_on=False))

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.NOT_FOUND
