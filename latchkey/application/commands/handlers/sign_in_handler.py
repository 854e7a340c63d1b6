"""Sign-in handler.

Flow (each step short-circuits):
1. CAPTCHA token present
2. CAPTCHA service reachable (fail closed)
3. CAPTCHA accepted
4. User exists and password matches (one message for both)
5. Account verified
6. 2FA enabled: return a TOTP challenge, no tokens
7. Issue access and refresh tokens
"""

from latchkey.application.commands.session_commands import SignIn
from latchkey.application.dtos import SessionIssued, TotpChallenge
from latchkey.application.errors import ApplicationError, ApplicationErrorCode
from latchkey.core.result import Failure, Result, Success
from latchkey.domain.protocols import (
    CaptchaVerifierProtocol,
    LoggerProtocol,
    PasswordHashingProtocol,
    SessionTokenProtocol,
    UserRepository,
)


class SignInError:
    """Sign-in specific error messages."""

    CAPTCHA_MISSING = "hCaptcha token missing"
    CAPTCHA_UNAVAILABLE = "hCaptcha verification error"
    CAPTCHA_REJECTED = "hCaptcha verification failed"
    INVALID_CREDENTIALS = "Invalid credentials"
    EMAIL_NOT_VERIFIED = "Please verify your email address before signing in"


class SignInHandler:
    """Handler for the SignIn command."""

    def __init__(
        self,
        user_repo: UserRepository,
        password_service: PasswordHashingProtocol,
        captcha_verifier: CaptchaVerifierProtocol,
        session_tokens: SessionTokenProtocol,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize sign-in handler with dependencies.

        Args:
            user_repo: User repository for lookups.
            password_service: Password verification service.
            captcha_verifier: hCaptcha client.
            session_tokens: Access/refresh token issuer.
            logger: Structured logger.
        """
        self._user_repo = user_repo
        self._password_service = password_service
        self._captcha_verifier = captcha_verifier
        self._session_tokens = session_tokens
        self._logger = logger

    async def handle(
        self, cmd: SignIn
    ) -> Result[SessionIssued | TotpChallenge, ApplicationError]:
        """Handle sign-in.

        Returns:
            Success(SessionIssued) when a session starts.
            Success(TotpChallenge) when the account requires a TOTP code.
            Failure(ApplicationError) otherwise.
        """
        # Step 1: CAPTCHA token present
        if not cmd.captcha_token:
            return Failure(
                error=ApplicationError(
                    code=ApplicationErrorCode.VALIDATION_FAILED,
                    message=SignInError.CAPTCHA_MISSING,
                )
            )

        # Steps 2-3: CAPTCHA verdict
        match await self._captcha_verifier.verify_human(cmd.captcha_token):
            case Failure(error=captcha_error):
                self._logger.error(
                    "hCaptcha verification error",
                    reason=captcha_error.message,
                )
                return Failure(
                    error=ApplicationError(
                        code=ApplicationErrorCode.EXTERNAL_SERVICE_ERROR,
                        message=SignInError.CAPTCHA_UNAVAILABLE,
                        domain_error=captcha_error,
                    )
                )
            case Success(value=False):
                self._logger.info("Sign-in rejected", reason="captcha_failed")
                return Failure(
                    error=ApplicationError(
                        code=ApplicationErrorCode.VALIDATION_FAILED,
                        message=SignInError.CAPTCHA_REJECTED,
                    )
                )

        # Step 4: Credentials (identical failure for unknown email and wrong password)
        user = await self._user_repo.find_by_email(cmd.email)
        password_ok = self._password_service.verify_password(
            cmd.password, user.password_hash if user else None
        )
        if user is None or not password_ok:
            self._logger.info(
                "Sign-in rejected",
                reason="invalid_credentials",
                user_id=user.id if user else None,
            )
            return Failure(
                error=ApplicationError(
                    code=ApplicationErrorCode.UNAUTHORIZED,
                    message=SignInError.INVALID_CREDENTIALS,
                )
            )

        # Step 5: Account verified
        if not user.can_sign_in():
            self._logger.info(
                "Sign-in rejected", reason="email_not_verified", user_id=user.id
            )
            return Failure(
                error=ApplicationError(
                    code=ApplicationErrorCode.FORBIDDEN,
                    message=SignInError.EMAIL_NOT_VERIFIED,
                )
            )

        # Step 6: 2FA challenge
        if user.requires_totp():
            self._logger.info("Sign-in awaiting TOTP", user_id=user.id)
            return Success(value=TotpChallenge(user_id=user.id))

        # Step 7: Issue session tokens
        self._logger.info("User signed in", user_id=user.id)
        return Success(
            value=SessionIssued(
                user=user,
                access_token=self._session_tokens.issue_access_token(user.id),
                refresh_token=self._session_tokens.issue_refresh_token(user.id),
            )
        )
