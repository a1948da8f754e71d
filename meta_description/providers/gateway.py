"""
HTTP gateway - the single choke point for outbound vendor calls.

Every provider request goes through ``HttpGateway.request``, which performs
exactly one HTTPS call with a bounded timeout and returns an ``ApiResult``
holding the decoded JSON payload. The gateway keeps no state between calls:
each request opens and closes its own ``aiohttp.ClientSession``, so a single
instance can be shared by every provider and every concurrent caller.

Failure mapping:
    transport failure (DNS, refused, timeout)  -> http_error
    non-2xx status                             -> http_error (+ status, raw body)
    body is not JSON                           -> parse_error
"""
from __future__ import annotations

import asyncio
import json
from typing import Any, Mapping

import aiohttp

from meta_description.config import get_logger
from meta_description.exceptions import HttpError, ParseError
from meta_description.result import ApiResult

logger = get_logger("gateway")

DEFAULT_TIMEOUT_SECONDS: float = 30.0
_LOGGED_BODY_CHARS = 500


def build_url(api_base: str, endpoint: str) -> str:
    """
    Join a provider base URL and an endpoint path.

    Absolute endpoints are returned unchanged, which lets a provider point
    one operation at a different API version.
    """
    if endpoint.startswith(("http://", "https://")):
        return endpoint
    return f"{api_base.rstrip('/')}/{endpoint.lstrip('/')}"


def default_headers(api_key: str) -> dict[str, str]:
    """Headers sent unless a provider's ``prepare_headers`` changes them."""
    return {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {api_key}",
    }


class HttpGateway:
    """
    Stateless async HTTP client returning decoded JSON or a structured failure.

    Args:
        default_timeout: Seconds allowed for a request when the caller passes none
    """

    def __init__(self, default_timeout: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        if default_timeout <= 0:
            raise ValueError("default_timeout must be positive")
        self._default_timeout = default_timeout

    @property
    def default_timeout(self) -> float:
        return self._default_timeout

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: Any = None,
        params: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> ApiResult[Any]:
        """
        Perform one HTTP request.

        Args:
            method: "GET" or "POST"
            url: Absolute URL without the query string
            headers: Request headers (already adjusted by the provider)
            body: JSON-serializable body, sent only when not None
            params: Query parameters (Gemini carries its key here)
            timeout: Total time budget in seconds

        Returns:
            ApiResult with the decoded JSON on success
        """
        method = method.upper()
        timeout_s = timeout if timeout is not None else self._default_timeout
        data = json.dumps(body) if body is not None else None

        logger.debug("%s %s | timeout=%.1fs", method, url, timeout_s)

        try:
            async with aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=timeout_s),
            ) as session:
                async with session.request(
                    method,
                    url,
                    headers=dict(headers or {}),
                    params=dict(params or {}),
                    data=data,
                ) as response:
                    status = response.status
                    raw = (await response.read()).decode("utf-8", errors="replace")

        except asyncio.TimeoutError:
            logger.warning("%s %s timed out after %.1fs", method, url, timeout_s)
            return ApiResult.failure(
                "http_error",
                f"Request timed out after {timeout_s:g} seconds.",
            )
        except aiohttp.ClientError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            return ApiResult.failure("http_error", str(e) or type(e).__name__)

        if not 200 <= status < 300:
            logger.warning(
                "%s %s returned HTTP %d | body=%s",
                method,
                url,
                status,
                raw[:_LOGGED_BODY_CHARS],
            )
            return ApiResult.from_error(
                HttpError(f"HTTP {status}", status=status, response_body=raw).to_api_error()
            )

        try:
            payload = json.loads(raw)
        except ValueError as e:
            logger.error(
                "%s %s returned invalid JSON (HTTP %d): %s",
                method,
                url,
                status,
                e,
            )
            return ApiResult.from_error(ParseError("Failed to decode API response.").to_api_error())

        return ApiResult.success(payload)
