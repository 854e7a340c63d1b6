"""Unit tests for Settings validation.

Settings are constructed directly with keyword values; the test
environment from conftest fills every other required field.
"""

import pytest
from pydantic import ValidationError

from latchkey.core.config import Settings
from latchkey.core.enums import Environment


@pytest.mark.unit
class TestSettingsValidation:
    def test_loads_test_environment(self):
        settings = Settings()

        assert settings.environment == Environment.TESTING
        assert settings.is_testing is True
        assert settings.is_production is False
        assert settings.bcrypt_rounds == 10

    def test_short_token_secret_rejected(self):
        with pytest.raises(ValidationError, match="at least 32 characters"):
            Settings(access_token_secret="too-short")

    def test_identical_token_secrets_rejected(self):
        secret = "s" * 40

        with pytest.raises(ValidationError, match="must differ"):
            Settings(access_token_secret=secret, refresh_token_secret=secret)

    @pytest.mark.parametrize("key", ["not base64!", "c2hvcnQ="])
    def test_bad_totp_encryption_key_rejected(self, key):
        with pytest.raises(ValidationError, match="totp_encryption_key"):
            Settings(totp_encryption_key=key)

    @pytest.mark.parametrize("rounds", [9, 21])
    def test_bcrypt_rounds_range(self, rounds):
        with pytest.raises(ValidationError, match="between 10 and 20"):
            Settings(bcrypt_rounds=rounds)

    def test_urls_lose_trailing_slash(self):
        settings = Settings(front_end_url="https://app.example.com/")

        assert settings.front_end_url == "https://app.example.com"

    def test_cors_origins_split(self):
        settings = Settings(cors_origins="https://a.example.com, https://b.example.com")

        assert settings.cors_origins == [
            "https://a.example.com",
            "https://b.example.com",
        ]
