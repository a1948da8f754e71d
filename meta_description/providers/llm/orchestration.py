"""
Shared request flow for every provider.

These are free functions parameterized by the provider value: check the
API key, let the provider shape headers and query parameters, perform one
gateway call, enrich failures with the vendor's own error text, then hand
the payload to the provider's parser. Provider parsers raise
``MetaDescriptionException`` subclasses; they are converted to ``ApiResult``
failures here and never escape.
"""
from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Any

from meta_description.config import get_logger
from meta_description.exceptions import ApiKeyMissingError, MetaDescriptionException
from meta_description.providers.gateway import default_headers
from meta_description.result import ApiError, ApiResult

if TYPE_CHECKING:
    from meta_description.providers.llm.interface import LLMProviderInterface, ModelDescriptor

logger = get_logger("llm.orchestration")

UNKNOWN_API_ERROR = "Unknown API error occurred."


async def send(
    provider: "LLMProviderInterface",
    method: str,
    url: str,
    *,
    body: Any = None,
    timeout: float | None = None,
) -> ApiResult[Any]:
    """
    Perform one authenticated call for ``provider``.

    Fails with ``api_key_missing`` without touching the network when the
    provider has no key.
    """
    if not provider.is_available():
        logger.info("Skipping %s request: no API key configured", provider.name())
        return ApiResult.from_error(ApiKeyMissingError(provider.title()).to_api_error())

    headers = provider.prepare_headers(default_headers(provider.credentials.api_key))
    result = await provider.gateway.request(
        method,
        url,
        headers=headers,
        body=body,
        params=provider.query_params(),
        timeout=timeout,
    )
    if result.ok:
        return result
    return ApiResult.from_error(enrich_error(provider, result.error))


def enrich_error(provider: "LLMProviderInterface", error: ApiError) -> ApiError:
    """Prefix gateway failures with the provider title and vendor message."""
    if error.code != "http_error":
        return error

    if error.status is None:
        message = f"{provider.title()} request failed: {error.message}"
    else:
        vendor_message = provider.extract_error_message(error.response_body or "")
        message = f"{provider.title()} API Error ({error.status}): {vendor_message or UNKNOWN_API_ERROR}"

    logger.error("%s | status=%s | %s", provider.name(), error.status, message)
    return replace(error, message=message)


async def fetch_models(provider: "LLMProviderInterface") -> ApiResult[list["ModelDescriptor"]]:
    """GET the vendor model list and parse it."""
    result = await send(provider, "GET", provider.models_url(), timeout=provider.models_timeout)
    if not result.ok:
        return result

    try:
        models = provider.parse_model_list(result.value)
    except MetaDescriptionException as e:
        logger.error("%s model list parse failed: %s", provider.name(), e.message)
        return ApiResult.from_error(e.to_api_error())

    logger.info("%s returned %d model(s)", provider.name(), len(models))
    return ApiResult.success(models)


async def generate_summary(
    provider: "LLMProviderInterface",
    prompt: str,
    model: str | None = None,
) -> ApiResult[str]:
    """POST a summary request and extract the generated text."""
    model = model or provider.model
    body = provider.build_summary_request_body(prompt, model)

    result = await send(
        provider,
        "POST",
        provider.summary_url(model),
        body=body,
        timeout=provider.summary_timeout,
    )
    if not result.ok:
        return result

    try:
        summary = provider.parse_summary(result.value)
    except MetaDescriptionException as e:
        logger.error("%s summary parse failed (model=%s): %s", provider.name(), model, e.message)
        return ApiResult.from_error(e.to_api_error())

    logger.info("%s summary generated | model=%s | chars=%d", provider.name(), model, len(summary))
    return ApiResult.success(summary)


def first_text_block(blocks: Any) -> Any:
    """
    Return the ``text`` of the first content block whose type is "text".

    Used by message-style APIs (Anthropic, Cohere) that answer with a list
    of typed blocks. Returns None when there is no such block.
    """
    if not isinstance(blocks, list):
        return None
    for block in blocks:
        if isinstance(block, dict) and block.get("type") == "text":
            return block.get("text")
    return None
