"""Unit tests for SignInHandler, VerifyTotpHandler and RefreshSessionHandler.

Architecture:
- Mocked repository and service protocols
- Handler logic only; persistence and crypto are covered by integration tests
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, Mock

import pytest

from latchkey.application.commands.handlers.refresh_session_handler import (
    RefreshSessionError,
    RefreshSessionHandler,
)
from latchkey.application.commands.handlers.sign_in_handler import (
    SignInError,
    SignInHandler,
)
from latchkey.application.commands.handlers.verify_totp_handler import (
    VerifyTotpError,
    VerifyTotpHandler,
)
from latchkey.application.commands.session_commands import (
    RefreshSession,
    SignIn,
    VerifyTotp,
)
from latchkey.application.dtos import SessionIssued, TotpChallenge
from latchkey.application.errors import ApplicationErrorCode
from latchkey.core.enums import ErrorCode
from latchkey.core.errors import UpstreamServiceError
from latchkey.core.result import Failure, Success
from latchkey.domain.enums import SessionTokenKind
from latchkey.domain.errors import SessionTokenError
from latchkey.domain.protocols import DecryptionError
from latchkey.domain.value_objects import SecretBundle, TokenClaims
from tests.conftest import STRONG_PASSWORD, make_user

BUNDLE = SecretBundle(ciphertext="Y2lwaGVy", init_vector="aXY=", auth_tag="dGFn")


def _session_tokens() -> Mock:
    tokens = Mock()
    tokens.issue_access_token.return_value = "access.jwt"
    tokens.issue_refresh_token.return_value = "refresh.jwt"
    return tokens


def _sign_in_handler(
    *,
    user=None,
    password_ok: bool = True,
    captcha_result=None,
    session_tokens: Mock | None = None,
) -> SignInHandler:
    user_repo = AsyncMock()
    user_repo.find_by_email.return_value = user

    password_service = Mock()
    password_service.verify_password.return_value = password_ok

    captcha = AsyncMock()
    captcha.verify_human.return_value = (
        captcha_result if captcha_result is not None else Success(value=True)
    )

    return SignInHandler(
        user_repo=user_repo,
        password_service=password_service,
        captcha_verifier=captcha,
        session_tokens=session_tokens or _session_tokens(),
        logger=Mock(),
    )


def _sign_in(**overrides) -> SignIn:
    fields = {
        "email": "ada@example.com",
        "password": STRONG_PASSWORD,
        "captcha_token": "captcha-token",
    }
    fields.update(overrides)
    return SignIn(**fields)


@pytest.mark.unit
class TestSignInCaptcha:
    """CAPTCHA gate runs before any credential check."""

    async def test_missing_captcha_token(self):
        handler = _sign_in_handler(user=make_user())

        result = await handler.handle(_sign_in(captcha_token=None))

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.VALIDATION_FAILED
        assert result.error.message == SignInError.CAPTCHA_MISSING

    async def test_captcha_service_failure_fails_closed(self):
        """Unreachable CAPTCHA service must not let the request through."""
        upstream = UpstreamServiceError(
            code=ErrorCode.CAPTCHA_UNAVAILABLE,
            message="hCaptcha timed out",
            service="hcaptcha",
        )
        handler = _sign_in_handler(
            user=make_user(), captcha_result=Failure(error=upstream)
        )

        result = await handler.handle(_sign_in())

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.EXTERNAL_SERVICE_ERROR
        assert result.error.message == SignInError.CAPTCHA_UNAVAILABLE
        assert result.error.domain_error == upstream

    async def test_captcha_rejected(self):
        handler = _sign_in_handler(
            user=make_user(), captcha_result=Success(value=False)
        )

        result = await handler.handle(_sign_in())

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.VALIDATION_FAILED
        assert result.error.message == SignInError.CAPTCHA_REJECTED


@pytest.mark.unit
class TestSignInCredentials:
    async def test_unknown_email_and_wrong_password_are_indistinguishable(self):
        """Both failures produce the same 401 message."""
        unknown = await _sign_in_handler(user=None).handle(_sign_in())
        wrong = await _sign_in_handler(user=make_user(), password_ok=False).handle(
            _sign_in()
        )

        assert isinstance(unknown, Failure)
        assert isinstance(wrong, Failure)
        assert unknown.error == wrong.error
        assert unknown.error.code == ApplicationErrorCode.UNAUTHORIZED
        assert unknown.error.message == SignInError.INVALID_CREDENTIALS

    async def test_unknown_email_still_runs_password_check(self):
        handler = _sign_in_handler(user=None)

        await handler.handle(_sign_in())

        handler._password_service.verify_password.assert_called_once_with(
            STRONG_PASSWORD, None
        )

    async def test_unverified_account_is_forbidden(self):
        handler = _sign_in_handler(user=make_user(account_verified=False))

        result = await handler.handle(_sign_in())

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.FORBIDDEN
        assert result.error.message == SignInError.EMAIL_NOT_VERIFIED


@pytest.mark.unit
class TestSignInSuccess:
    async def test_issues_both_tokens(self):
        # Arrange
        tokens = _session_tokens()
        user = make_user()
        handler = _sign_in_handler(user=user, session_tokens=tokens)

        # Act
        result = await handler.handle(_sign_in())

        # Assert
        assert isinstance(result, Success)
        assert isinstance(result.value, SessionIssued)
        assert result.value.user is user
        assert result.value.access_token == "access.jwt"
        assert result.value.refresh_token == "refresh.jwt"
        tokens.issue_access_token.assert_called_once_with(user.id)
        tokens.issue_refresh_token.assert_called_once_with(user.id)

    async def test_totp_account_gets_challenge_without_tokens(self):
        tokens = _session_tokens()
        user = make_user(id=7, totp_auth_on=True, totp_secret=BUNDLE)
        handler = _sign_in_handler(user=user, session_tokens=tokens)

        result = await handler.handle(_sign_in())

        assert result == Success(value=TotpChallenge(user_id=7))
        tokens.issue_access_token.assert_not_called()
        tokens.issue_refresh_token.assert_not_called()


def _verify_totp_handler(
    *, user=None, decrypted=None, code_ok: bool = True
) -> tuple[VerifyTotpHandler, Mock]:
    user_repo = AsyncMock()
    user_repo.find_by_id.return_value = user

    codec = Mock()
    codec.decrypt.return_value = (
        decrypted if decrypted is not None else Success(value="JBSWY3DPEHPK3PXP")
    )

    totp = Mock()
    totp.verify_code.return_value = code_ok

    tokens = _session_tokens()
    handler = VerifyTotpHandler(
        user_repo=user_repo,
        secret_codec=codec,
        totp_service=totp,
        session_tokens=tokens,
        logger=Mock(),
    )
    return handler, tokens


@pytest.mark.unit
class TestVerifyTotpHandler:
    @pytest.mark.parametrize(
        ("user_id", "code"),
        [(None, "123456"), (1, None), (1, "12345"), (1, "12a456")],
    )
    async def test_missing_or_malformed_fields(self, user_id, code):
        handler, _ = _verify_totp_handler(user=make_user())

        result = await handler.handle(VerifyTotp(user_id=user_id, totp_code=code))

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.VALIDATION_FAILED
        assert result.error.message == VerifyTotpError.MISSING_FIELDS

    async def test_unknown_user(self):
        handler, _ = _verify_totp_handler(user=None)

        result = await handler.handle(VerifyTotp(user_id=99, totp_code="123456"))

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.NOT_FOUND
        assert result.error.message == VerifyTotpError.USER_NOT_FOUND

    async def test_account_without_totp_is_rejected(self):
        handler, tokens = _verify_totp_handler(user=make_user())

        result = await handler.handle(VerifyTotp(user_id=1, totp_code="123456"))

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.UNAUTHORIZED
        assert result.error.message == VerifyTotpError.INVALID_TOTP
        tokens.issue_access_token.assert_not_called()

    async def test_wrong_code(self):
        handler, _ = _verify_totp_handler(
            user=make_user(totp_auth_on=True, totp_secret=BUNDLE), code_ok=False
        )

        result = await handler.handle(VerifyTotp(user_id=1, totp_code="000000"))

        assert isinstance(result, Failure)
        assert result.error.message == VerifyTotpError.INVALID_TOTP

    async def test_undecryptable_secret_is_invalid_totp(self):
        handler, _ = _verify_totp_handler(
            user=make_user(totp_auth_on=True, totp_secret=BUNDLE),
            decrypted=Failure(
                error=DecryptionError(
                    code=ErrorCode.DECRYPTION_FAILED, message="Decryption failed"
                )
            ),
        )

        result = await handler.handle(VerifyTotp(user_id=1, totp_code="123456"))

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.UNAUTHORIZED

    async def test_valid_code_issues_session(self):
        user = make_user(totp_auth_on=True, totp_secret=BUNDLE)
        handler, tokens = _verify_totp_handler(user=user)

        result = await handler.handle(VerifyTotp(user_id=1, totp_code="123456"))

        assert isinstance(result, Success)
        assert result.value.access_token == "access.jwt"
        assert result.value.refresh_token == "refresh.jwt"


@pytest.mark.unit
class TestRefreshSessionHandler:
    async def test_missing_cookie(self):
        handler = RefreshSessionHandler(session_tokens=_session_tokens(), logger=Mock())

        result = await handler.handle(RefreshSession(refresh_token=None))

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.UNAUTHORIZED
        assert result.error.message == RefreshSessionError.TOKEN_MISSING

    async def test_invalid_token(self):
        tokens = _session_tokens()
        tokens.verify.return_value = Failure(
            error=SessionTokenError(
                code=ErrorCode.TOKEN_EXPIRED, message="Token has expired"
            )
        )
        handler = RefreshSessionHandler(session_tokens=tokens, logger=Mock())

        result = await handler.handle(RefreshSession(refresh_token="stale"))

        assert isinstance(result, Failure)
        assert result.error.message == RefreshSessionError.TOKEN_INVALID
        tokens.verify.assert_called_once_with("stale", SessionTokenKind.REFRESH)

    async def test_valid_token_mints_access_token(self):
        tokens = _session_tokens()
        now = datetime.now(UTC)
        tokens.verify.return_value = Success(
            value=TokenClaims(
                user_id=5,
                kind=SessionTokenKind.REFRESH,
                issued_at=now,
                expires_at=now,
                token_id="jti",
            )
        )
        handler = RefreshSessionHandler(session_tokens=tokens, logger=Mock())

        result = await handler.handle(RefreshSession(refresh_token="good"))

        assert result == Success(value="access.jwt")
        tokens.issue_access_token.assert_called_once_with(5)
        tokens.issue_refresh_token.assert_not_called()
