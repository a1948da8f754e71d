"""
Pydantic models for request/response validation and OpenAPI documentation.

This module defines the data transfer objects (DTOs) of the HTTP surface:
- Request models for the AI endpoints
- Response models for consistent API outputs
- Health and readiness payloads

Usage:
    from meta_description.models import SummaryRequest, SummaryResponse
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from meta_description import __version__
from meta_description.config import PROVIDER_NAMES


# =============================================================================
# Request Models
# =============================================================================

class ModelsRequest(BaseModel):
    """
    Request for a provider's model list.

    Example:
        >>> ModelsRequest(provider="openai")
    """

    model_config = ConfigDict(
        str_strip_whitespace=True,
        json_schema_extra={"examples": [{"provider": "openai"}]},
    )

    provider: str = Field(
        ...,
        min_length=1,
        max_length=64,
        description="Registered provider name",
        examples=list(PROVIDER_NAMES),
    )

    @field_validator("provider")
    @classmethod
    def lowercase_provider(cls, v: str) -> str:
        return v.lower()


class SummaryRequest(ModelsRequest):
    """
    Request to generate a meta description.

    ``content`` may contain HTML; it is sanitized before prompting. Empty
    content is rejected by the service with ``validation_error``.
    """

    model_config = ConfigDict(
        str_strip_whitespace=True,
        json_schema_extra={
            "examples": [
                {
                    "provider": "gemini",
                    "content": "<p>Our guide to brewing pour-over coffee at home...</p>",
                },
                {
                    "provider": "openai",
                    "content": "Quarterly results for the regional bakery chain...",
                    "model": "gpt-4o-mini",
                },
            ]
        },
    )

    content: str = Field(
        ...,
        description="Post content to summarize",
    )
    model: str | None = Field(
        default=None,
        max_length=200,
        description="Model for this request only (defaults to the configured model)",
    )


# =============================================================================
# Response Models
# =============================================================================

class ModelInfo(BaseModel):
    """One selectable model."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="Model identifier sent to the vendor")
    display_name: str = Field(
        ...,
        alias="displayName",
        description="Human-readable model name",
    )


class ModelsResponse(BaseModel):
    """Model list of one provider."""

    models: list[ModelInfo] = Field(default_factory=list)


class SummaryResponse(BaseModel):
    """Generated meta description."""

    summary: str = Field(..., description="Trimmed summary text")
    provider: str = Field(..., description="Provider that produced the summary")
    model: str = Field(..., description="Model used for this request")


class ErrorBody(BaseModel):
    """Structured failure, mirrors ``ApiError``."""

    model_config = ConfigDict(frozen=True)

    code: str = Field(
        ...,
        description="Machine-readable error code",
        examples=["provider_not_found", "api_key_missing", "http_error", "parse_error"],
    )
    message: str = Field(..., description="Human-readable error message")


class ErrorResponse(BaseModel):
    """
    Standard error response format.

    All AI endpoint failures return this format for consistency.
    """

    model_config = ConfigDict(frozen=True)

    error: ErrorBody


class ProviderInfo(BaseModel):
    """Public description of a registered provider (never includes the key)."""

    model_config = ConfigDict(frozen=True)

    name: str
    title: str
    default_model: str
    model: str = Field(..., description="Model selected in configuration")
    key_acquisition_url: str
    available: bool = Field(..., description="Whether an API key is configured")


class ProvidersResponse(BaseModel):
    providers: list[ProviderInfo] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """
    Health check response with provider statuses.

    Example:
        >>> health = HealthResponse(
        ...     status="healthy",
        ...     providers={"openai": {"available": True}},
        ...     timestamp="2024-01-01T00:00:00Z"
        ... )
    """

    status: str = Field(
        ...,
        description="Overall health status",
        examples=["healthy", "degraded", "unhealthy"],
    )
    providers: dict[str, Any] = Field(
        ...,
        description="Per-provider status",
    )
    timestamp: str = Field(..., description="ISO 8601 timestamp")
    version: str = Field(default=__version__, description="API version")


class ReadinessResponse(BaseModel):
    """Readiness probe response for container orchestration."""

    model_config = ConfigDict(frozen=True)

    ready: bool = Field(
        ...,
        description="Whether the service is ready to accept requests",
    )
    checks: dict[str, bool] = Field(
        default_factory=dict,
        description="Individual readiness check results",
    )


class PingResponse(BaseModel):
    """Simple ping response."""

    model_config = ConfigDict(frozen=True)

    status: str = Field(default="ok", description="Ping status")
