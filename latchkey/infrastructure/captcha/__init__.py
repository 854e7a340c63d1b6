"""CAPTCHA verification adapters."""

from latchkey.infrastructure.captcha.hcaptcha_verifier import HCaptchaVerifier

__all__ = ["HCaptchaVerifier"]
