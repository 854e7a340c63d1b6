"""CAPTCHA verification protocol (port)."""

from typing import Protocol

from latchkey.core.errors import UpstreamServiceError
from latchkey.core.result import Result


class CaptchaVerifierProtocol(Protocol):
    """Human verification through an external CAPTCHA service."""

    async def verify_human(
        self, captcha_token: str
    ) -> Result[bool, UpstreamServiceError]:
        """Ask the CAPTCHA service whether ``captcha_token`` is valid.

        Returns:
            Success(True/False) with the service verdict.
            Failure(UpstreamServiceError) when the service cannot be reached,
            times out, or answers with an unusable response.
        """
        ...
