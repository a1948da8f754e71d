"""
Tagged result type returned by every public operation.

An ``ApiResult`` holds either a success value or an ``ApiError``, never both.
Callers branch on ``ok`` instead of catching exceptions.

Usage:
    result = await api_client.fetch_models("openai")
    if result.ok:
        models = result.value
    else:
        print(result.error.code, result.error.message)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ApiError:
    """
    Structured failure.

    Attributes:
        code: One of provider_not_found, api_key_missing, http_error, parse_error
        message: Human-readable message, safe to show next to a "Generate" button
        status: Upstream HTTP status when one was received
        response_body: Raw upstream body for non-2xx responses
    """
    code: str
    message: str
    status: int | None = None
    response_body: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message}


@dataclass(frozen=True)
class ApiResult(Generic[T]):
    """Success value or structured failure."""
    value: T | None = None
    error: ApiError | None = None

    def __post_init__(self) -> None:
        if self.error is not None and self.value is not None:
            raise ValueError("ApiResult cannot carry both a value and an error")

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "ApiResult[T]":
        return cls(value=value)

    @classmethod
    def failure(
        cls,
        code: str,
        message: str,
        status: int | None = None,
        response_body: str | None = None,
    ) -> "ApiResult[T]":
        return cls(error=ApiError(code, message, status, response_body))

    @classmethod
    def from_error(cls, error: ApiError) -> "ApiResult[T]":
        return cls(error=error)
