"""
Centralized configuration using Pydantic BaseSettings.

Configuration Philosophy:
    - .env: Only sensitive data (provider API keys)
    - config.py: All application settings with sensible defaults

Every provider reads the same four settings, prefixed with its name:
    GEMINI_API_KEY / GEMINI_MODEL / GEMINI_ENABLED / GEMINI_CUSTOM_PROMPT
    (and likewise for MISTRAL_, OPENAI_, ANTHROPIC_, COHERE_)

Usage:
    from meta_description.config import settings, get_logger

    credentials = settings.credentials_for("openai", default_model="gpt-3.5-turbo")
"""
from __future__ import annotations

import logging
import re
from functools import cached_property, lru_cache
from typing import TYPE_CHECKING, ClassVar, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from meta_description.exceptions import ConfigurationError

if TYPE_CHECKING:
    from meta_description.providers.llm.interface import ProviderCredentials


PROVIDER_NAMES: tuple[str, ...] = ("gemini", "mistral", "openai", "anthropic", "cohere")


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Configuration Sources:
        1. Environment variables
        2. .env file (if present)
        3. Default values (defined below)

    API keys are optional: a provider without a key is still registered
    and reports ``api_key_missing`` when it is called.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    # =========================================================================
    # Server Configuration
    # =========================================================================

    HOST: str = Field(
        default="0.0.0.0",
        description="Server host (0.0.0.0 for external access, 127.0.0.1 for local only)",
    )
    PORT: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="Server port number",
    )
    DEBUG: bool = Field(
        default=False,
        description="Debug mode - enables auto-reload (NEVER use in production)",
    )
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging verbosity level",
    )

    # =========================================================================
    # Gemini (https://aistudio.google.com/app/apikey)
    # =========================================================================

    GEMINI_API_KEY: str = Field(default="", description="Gemini API key (sent as ?key= query parameter)")
    GEMINI_MODEL: str = Field(default="", description="Selected Gemini model (empty = provider default)")
    GEMINI_ENABLED: bool = Field(default=True, description="Register the Gemini provider")
    GEMINI_CUSTOM_PROMPT: str = Field(default="", description="Replaces the default summary instruction")

    # =========================================================================
    # Mistral (https://console.mistral.ai)
    # =========================================================================

    MISTRAL_API_KEY: str = Field(default="", description="Mistral API key")
    MISTRAL_MODEL: str = Field(default="", description="Selected Mistral model (empty = provider default)")
    MISTRAL_ENABLED: bool = Field(default=True, description="Register the Mistral provider")
    MISTRAL_CUSTOM_PROMPT: str = Field(default="", description="Replaces the default summary instruction")

    # =========================================================================
    # OpenAI (https://platform.openai.com)
    # =========================================================================

    OPENAI_API_KEY: str = Field(default="", description="OpenAI API key")
    OPENAI_MODEL: str = Field(default="", description="Selected OpenAI model (empty = provider default)")
    OPENAI_ENABLED: bool = Field(default=True, description="Register the OpenAI provider")
    OPENAI_CUSTOM_PROMPT: str = Field(default="", description="Replaces the default summary instruction")

    # =========================================================================
    # Anthropic (https://console.anthropic.com)
    # =========================================================================

    ANTHROPIC_API_KEY: str = Field(default="", description="Anthropic API key (sent as x-api-key)")
    ANTHROPIC_MODEL: str = Field(default="", description="Selected Anthropic model (empty = provider default)")
    ANTHROPIC_ENABLED: bool = Field(default=True, description="Register the Anthropic provider")
    ANTHROPIC_CUSTOM_PROMPT: str = Field(default="", description="Replaces the default summary instruction")

    # =========================================================================
    # Cohere (https://dashboard.cohere.com)
    # =========================================================================

    COHERE_API_KEY: str = Field(default="", description="Cohere API key")
    COHERE_MODEL: str = Field(default="", description="Selected Cohere model (empty = provider default)")
    COHERE_ENABLED: bool = Field(default=True, description="Register the Cohere provider")
    COHERE_CUSTOM_PROMPT: str = Field(default="", description="Replaces the default summary instruction")

    # =========================================================================
    # Outbound HTTP
    # =========================================================================
    # No retries: every call is exactly one request bounded by these timeouts

    MODELS_TIMEOUT_SECONDS: float = Field(
        default=15.0,
        gt=0,
        description="Maximum time to wait for a vendor model list",
    )
    SUMMARY_TIMEOUT_SECONDS: float = Field(
        default=30.0,
        gt=0,
        description="Maximum time to wait for a vendor summary completion",
    )

    # =========================================================================
    # Summary Configuration
    # =========================================================================

    MIN_DESCRIPTION_LENGTH: int = Field(
        default=120,
        ge=1,
        description="Lower bound (characters) requested from the model",
    )
    MAX_DESCRIPTION_LENGTH: int = Field(
        default=160,
        ge=1,
        description="Upper bound (characters) requested from the model",
    )
    MAX_CONTENT_LENGTH: int = Field(
        default=20_000,
        ge=1,
        description="Content longer than this is truncated before prompting",
    )

    # =========================================================================
    # HTTP Surface
    # =========================================================================

    MAX_REQUEST_SIZE: int = Field(
        default=1_000_000,
        ge=1,
        description="Maximum HTTP request body size in bytes (1MB default)",
    )
    RATE_LIMIT: str = Field(
        default="30/minute",
        pattern=r"^\d+/(second|minute|hour|day)$",
        description="Rate limit for the summary endpoint (format: 'count/period')",
    )
    CORS_ORIGINS: str = Field(
        default="*",
        description="Comma-separated allowed origins ('*' for all, restrict in production)",
    )

    # =========================================================================
    # Validators
    # =========================================================================

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def uppercase_log_level(cls, v: str) -> str:
        """Ensure LOG_LEVEL is uppercase."""
        return v.upper() if isinstance(v, str) else v

    @field_validator(
        "GEMINI_API_KEY",
        "MISTRAL_API_KEY",
        "OPENAI_API_KEY",
        "ANTHROPIC_API_KEY",
        "COHERE_API_KEY",
        "GEMINI_MODEL",
        "MISTRAL_MODEL",
        "OPENAI_MODEL",
        "ANTHROPIC_MODEL",
        "COHERE_MODEL",
        mode="before",
    )
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Keys and model ids pasted from dashboards often carry stray whitespace."""
        return v.strip() if isinstance(v, str) else v

    @model_validator(mode="after")
    def validate_description_bounds(self) -> "Settings":
        """Validate that the requested description range is not inverted."""
        if self.MIN_DESCRIPTION_LENGTH > self.MAX_DESCRIPTION_LENGTH:
            raise ValueError(
                "MIN_DESCRIPTION_LENGTH must not exceed MAX_DESCRIPTION_LENGTH"
            )
        return self

    # =========================================================================
    # Computed Properties
    # =========================================================================

    @cached_property
    def CORS_ORIGINS_LIST(self) -> list[str]:
        """Get list of CORS origins."""
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    # =========================================================================
    # Per-Provider Lookups
    # =========================================================================

    def _provider_value(self, name: str, suffix: str):
        if name not in PROVIDER_NAMES:
            raise ConfigurationError(f"Unknown provider: {name}")
        return getattr(self, f"{name.upper()}_{suffix}")

    def credentials_for(self, name: str, default_model: str) -> "ProviderCredentials":
        """
        Build the credentials a provider is constructed with.

        Args:
            name: Provider name (e.g. "gemini")
            default_model: Model used when no model is configured

        Returns:
            ProviderCredentials with the configured key and model
        """
        from meta_description.providers.llm.interface import ProviderCredentials

        return ProviderCredentials(
            api_key=self._provider_value(name, "API_KEY"),
            model=self._provider_value(name, "MODEL") or default_model,
        )

    def is_provider_enabled(self, name: str) -> bool:
        """Check the provider's enable flag."""
        return bool(self._provider_value(name, "ENABLED"))

    def custom_prompt_for(self, name: str) -> str:
        """
        Get the provider's custom summary instruction (empty = default).

        Providers registered under a name without settings use the default.
        """
        if name not in PROVIDER_NAMES:
            return ""
        return self._provider_value(name, "CUSTOM_PROMPT").strip()


# =============================================================================
# Settings Factory with Caching
# =============================================================================

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache for singleton behavior while allowing
    cache invalidation in tests.
    """
    return Settings()


# Convenience alias for direct access
settings = get_settings()


# =============================================================================
# Logging Configuration
# =============================================================================

class SanitizingFormatter(logging.Formatter):
    """
    Logging formatter that redacts sensitive information.

    Automatically redacts:
    - Bearer tokens
    - API keys (including x-api-key headers)
    - Gemini's ?key= query parameter
    """

    SENSITIVE_PATTERNS: ClassVar[list[tuple[re.Pattern[str], str]]] = [
        (re.compile(r'(Bearer\s+)[^\s"\']+', re.I), r'\1[REDACTED]'),
        (re.compile(r'((?:x-)?api[_-]?key["\']?\s*[:=]\s*["\']?)[^"\'\s,}]+', re.I), r'\1[REDACTED]'),
        (re.compile(r'([?&]key=)[^&\s"\']+', re.I), r'\1[REDACTED]'),
    ]

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with sensitive data redaction."""
        message = super().format(record)
        for pattern, replacement in self.SENSITIVE_PATTERNS:
            message = pattern.sub(replacement, message)
        return message


def configure_logging(log_level: str = "INFO") -> None:
    """
    Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    log_format = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

    handler = logging.StreamHandler()
    handler.setFormatter(SanitizingFormatter(log_format))

    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        handlers=[handler],
        force=True,
    )

    # Suppress noisy third-party loggers
    for logger_name in ("aiohttp", "urllib3", "asyncio"):
        logging.getLogger(logger_name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name (typically the area, e.g. "llm.gemini")

    Returns:
        Configured logging.Logger instance
    """
    return logging.getLogger(name)


# Initialize logging on module load
configure_logging(settings.LOG_LEVEL)
