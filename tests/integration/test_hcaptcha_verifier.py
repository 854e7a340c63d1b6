"""Integration tests for HCaptchaVerifier using pytest-httpx.

The verifier must fail closed: every transport or protocol problem is a
Failure, never a pass.
"""

import httpx
import pytest

from latchkey.core.enums import ErrorCode
from latchkey.core.result import Failure, Success
from latchkey.infrastructure.captcha import HCaptchaVerifier

VERIFY_URL = "https://hcaptcha.test/siteverify"


def _verifier() -> HCaptchaVerifier:
    return HCaptchaVerifier(secret="0xsecret", verify_url=VERIFY_URL, timeout=1.0)


@pytest.mark.integration
class TestHCaptchaVerifier:
    async def test_accepted_token(self, httpx_mock):
        httpx_mock.add_response(url=VERIFY_URL, method="POST", json={"success": True})

        result = await _verifier().verify_human("client-token")

        assert result == Success(value=True)
        request = httpx_mock.get_request()
        assert request.headers["content-type"] == "application/x-www-form-urlencoded"
        assert b"secret=0xsecret" in request.content
        assert b"response=client-token" in request.content

    async def test_rejected_token(self, httpx_mock):
        httpx_mock.add_response(
            url=VERIFY_URL,
            method="POST",
            json={"success": False, "error-codes": ["invalid-input-response"]},
        )

        result = await _verifier().verify_human("client-token")

        assert result == Success(value=False)

    async def test_missing_success_field_is_rejection(self, httpx_mock):
        httpx_mock.add_response(url=VERIFY_URL, method="POST", json={})

        assert await _verifier().verify_human("client-token") == Success(value=False)

    async def test_timeout_fails_closed(self, httpx_mock):
        httpx_mock.add_exception(httpx.ReadTimeout("timed out"), url=VERIFY_URL)

        result = await _verifier().verify_human("client-token")

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.CAPTCHA_UNAVAILABLE
        assert result.error.service == "hcaptcha"

    async def test_connection_error_fails_closed(self, httpx_mock):
        httpx_mock.add_exception(httpx.ConnectError("refused"), url=VERIFY_URL)

        assert isinstance(await _verifier().verify_human("client-token"), Failure)

    async def test_server_error_fails_closed(self, httpx_mock):
        httpx_mock.add_response(url=VERIFY_URL, method="POST", status_code=503)

        assert isinstance(await _verifier().verify_human("client-token"), Failure)

    async def test_non_json_body_fails_closed(self, httpx_mock):
        httpx_mock.add_response(url=VERIFY_URL, method="POST", text="<html>oops</html>")

        assert isinstance(await _verifier().verify_human("client-token"), Failure)
