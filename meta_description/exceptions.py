"""
Custom exceptions for the meta description service.

The hierarchy mirrors the error taxonomy returned to callers. Providers raise
these internally; the shared request flow converts them into ``ApiResult``
failures so that nothing is thrown past the API client.

Exception Hierarchy:
    MetaDescriptionException (base)
    ├── ConfigurationError             configuration_error
    ├── ValidationError                validation_error
    ├── ProviderNotFoundError          provider_not_found
    ├── ApiKeyMissingError             api_key_missing
    ├── HttpError                      http_error (+ upstream status, body)
    └── ParseError                     parse_error

HTTP statuses for the API surface are chosen in ``routes.ai``; only
``HttpError`` carries a status, and that is the vendor's.

Usage:
    from meta_description.exceptions import ParseError

    raise ParseError("OpenAI response missing expected summary data")
"""
from __future__ import annotations

from meta_description.result import ApiError


class MetaDescriptionException(Exception):
    """
    Base exception for all service errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code
    """

    default_message: str = "An error occurred"
    default_error_code: str = "internal_error"

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.error_code = error_code or self.default_error_code
        super().__init__(self.message)

    def to_api_error(self) -> ApiError:
        """Convert exception to the failure value carried by ``ApiResult``."""
        return ApiError(code=self.error_code, message=self.message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r})"


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(MetaDescriptionException):
    """
    Raised when configuration is invalid or missing.

    Examples:
        - Settings looked up for a provider name that has no settings
    """

    default_message = "Configuration error"
    default_error_code = "configuration_error"


# =============================================================================
# Client Errors
# =============================================================================

class ValidationError(MetaDescriptionException):
    """
    Raised when input validation fails.

    Examples:
        - Empty content
        - Content that is only markup or whitespace
    """

    default_message = "Validation error"
    default_error_code = "validation_error"


class ProviderNotFoundError(MetaDescriptionException):
    """Raised when a provider name is not registered."""

    default_message = "AI provider is not registered or supported"
    default_error_code = "provider_not_found"

    def __init__(self, provider_name: str) -> None:
        super().__init__(f'AI provider "{provider_name}" is not registered or supported.')
        self.provider_name = provider_name


class ApiKeyMissingError(MetaDescriptionException):
    """Raised before any HTTP call when a provider has no API key."""

    default_message = "API key is not set"
    default_error_code = "api_key_missing"

    def __init__(self, provider_title: str) -> None:
        super().__init__(f"API key for {provider_title} is not set.")


# =============================================================================
# Upstream Errors
# =============================================================================

class HttpError(MetaDescriptionException):
    """
    Raised when the vendor API answers non-2xx.

    Attributes:
        status: Upstream HTTP status
        response_body: Raw upstream body
    """

    default_message = "Upstream API error"
    default_error_code = "http_error"

    def __init__(
        self,
        message: str | None = None,
        status: int | None = None,
        response_body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.response_body = response_body

    def to_api_error(self) -> ApiError:
        return ApiError(
            code=self.error_code,
            message=self.message,
            status=self.status,
            response_body=self.response_body,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, status={self.status})"


class ParseError(MetaDescriptionException):
    """
    Raised when a successful response does not have the expected shape.

    Examples:
        - Body is not valid JSON
        - Model list array missing
        - Summary text absent, null or not a string
    """

    default_message = "Unable to parse API response"
    default_error_code = "parse_error"
