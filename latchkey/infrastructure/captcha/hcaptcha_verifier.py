"""hCaptcha verification client.

POSTs the client's response token to the siteverify endpoint as a form
(``secret``, ``response``). Any transport failure, timeout, non-200 status
or unparseable body is an upstream failure: sign-in fails closed.
"""

import httpx
import structlog

from latchkey.core.constants import CAPTCHA_TIMEOUT_DEFAULT
from latchkey.core.enums import ErrorCode
from latchkey.core.errors import UpstreamServiceError
from latchkey.core.result import Failure, Result, Success


class HCaptchaVerifier:
    """Implements CaptchaVerifierProtocol against hCaptcha.

    Attributes:
        _secret: hCaptcha account secret.
        _verify_url: siteverify endpoint.
        _timeout: Request timeout in seconds.
    """

    SERVICE_NAME = "hcaptcha"

    def __init__(
        self,
        *,
        secret: str,
        verify_url: str = "https://hcaptcha.com/siteverify",
        timeout: float = CAPTCHA_TIMEOUT_DEFAULT,
    ) -> None:
        self._secret = secret
        self._verify_url = verify_url
        self._timeout = timeout
        self._logger = structlog.get_logger("hcaptcha")

    async def verify_human(
        self, captcha_token: str
    ) -> Result[bool, UpstreamServiceError]:
        """Ask hCaptcha whether ``captcha_token`` is valid.

        Returns:
            Success(bool) with the ``success`` field of the response.
            Failure(UpstreamServiceError) on timeout, connection error,
            non-200 status or malformed body.
        """
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(
                    self._verify_url,
                    data={"secret": self._secret, "response": captcha_token},
                )
        except httpx.TimeoutException as e:
            self._logger.warning("hcaptcha_timeout", error=str(e))
            return self._unavailable("hCaptcha verification timed out")
        except httpx.RequestError as e:
            self._logger.warning("hcaptcha_connection_error", error=str(e))
            return self._unavailable("hCaptcha verification request failed")

        if response.status_code != 200:
            self._logger.warning(
                "hcaptcha_unexpected_status", status_code=response.status_code
            )
            return self._unavailable("hCaptcha returned an unexpected status")

        try:
            body = response.json()
        except ValueError:
            self._logger.warning("hcaptcha_invalid_json")
            return self._unavailable("hCaptcha returned a malformed response")

        if not isinstance(body, dict):
            return self._unavailable("hCaptcha returned a malformed response")

        success = body.get("success") is True
        if not success:
            self._logger.info(
                "hcaptcha_rejected", error_codes=body.get("error-codes", [])
            )
        return Success(value=success)

    def _unavailable(self, message: str) -> Failure[UpstreamServiceError]:
        return Failure(
            error=UpstreamServiceError(
                code=ErrorCode.CAPTCHA_UNAVAILABLE,
                message=message,
                service=self.SERVICE_NAME,
            )
        )
