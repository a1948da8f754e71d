"""Tests for settings and log redaction."""
import logging

import pytest
from pydantic import ValidationError

from meta_description.config import SanitizingFormatter, Settings
from meta_description.exceptions import ConfigurationError


def format_message(message: str) -> str:
    formatter = SanitizingFormatter("%(message)s")
    record = logging.LogRecord("test", logging.INFO, __file__, 1, message, None, None)
    return formatter.format(record)


class TestSettings:

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.MODELS_TIMEOUT_SECONDS == 15
        assert settings.SUMMARY_TIMEOUT_SECONDS == 30
        assert settings.MIN_DESCRIPTION_LENGTH == 120
        assert settings.MAX_DESCRIPTION_LENGTH == 160

    def test_inverted_description_bounds_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, MIN_DESCRIPTION_LENGTH=200, MAX_DESCRIPTION_LENGTH=100)

    def test_non_positive_timeout_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, SUMMARY_TIMEOUT_SECONDS=0)

    def test_log_level_is_uppercased(self):
        assert Settings(_env_file=None, LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"

    def test_credentials_fall_back_to_default_model(self):
        settings = Settings(_env_file=None, ANTHROPIC_API_KEY="k", ANTHROPIC_MODEL="   ")

        credentials = settings.credentials_for("anthropic", "claude-3-sonnet-20240229")

        assert credentials.api_key == "k"
        assert credentials.model == "claude-3-sonnet-20240229"

    def test_unknown_provider_lookup(self):
        with pytest.raises(ConfigurationError):
            Settings(_env_file=None).is_provider_enabled("bard")

    def test_custom_prompt_for_name_without_settings(self):
        assert Settings(_env_file=None).custom_prompt_for("in-house") == ""

    def test_custom_prompt_is_stripped(self):
        settings = Settings(_env_file=None, GEMINI_CUSTOM_PROMPT="  Describe briefly  ")

        assert settings.custom_prompt_for("gemini") == "Describe briefly"

    def test_cors_origins_list(self):
        settings = Settings(_env_file=None, CORS_ORIGINS="https://a.test, https://b.test")

        assert settings.CORS_ORIGINS_LIST == ["https://a.test", "https://b.test"]


class TestSanitizingFormatter:

    def test_redacts_bearer_token(self):
        assert "sk-live" not in format_message("Authorization: Bearer sk-live-123")

    def test_redacts_api_key_header(self):
        output = format_message("headers={'x-api-key': 'sk-ant-999'}")

        assert "sk-ant-999" not in output
        assert "[REDACTED]" in output

    def test_redacts_key_query_parameter(self):
        output = format_message("GET https://x.test/v1beta/models?key=AIzaSecret&pageSize=5")

        assert "AIzaSecret" not in output
        assert "pageSize=5" in output

    def test_leaves_plain_messages_alone(self):
        assert format_message("openai returned 3 model(s)") == "openai returned 3 model(s)"
