"""
API client facade.

The single entry point for callers: resolve a provider by name and delegate
"fetch models" or "generate summary" to it. Every public operation returns
an ``ApiResult``; nothing raises past this class.

Usage:
    from meta_description.services.api_client import ApiClient

    client = ApiClient(registry, settings)
    result = await client.generate_summary("openai", post_html)
    if result.ok:
        print(result.value)
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from meta_description.config import Settings, get_logger
from meta_description.exceptions import ProviderNotFoundError, ValidationError
from meta_description.result import ApiResult
from meta_description.services.summary import build_summary_prompt
from meta_description.utils import sanitize_text

if TYPE_CHECKING:
    from meta_description.providers.llm import (
        LLMProviderInterface,
        ModelDescriptor,
        ProviderRegistry,
    )

logger = get_logger("api_client")


class ApiClient:
    """
    Facade over the provider registry.

    Args:
        registry: Registry built at startup
        settings: Supplies description bounds, content limit and custom prompts
    """

    def __init__(self, registry: "ProviderRegistry", settings: Settings) -> None:
        self._registry = registry
        self._settings = settings

    @property
    def registry(self) -> "ProviderRegistry":
        return self._registry

    def _resolve(self, provider_name: str) -> "LLMProviderInterface | None":
        provider = self._registry.resolve(provider_name)
        if provider is None:
            logger.warning("Unknown provider requested: %s", provider_name)
        return provider

    async def fetch_models(self, provider_name: str) -> ApiResult[list["ModelDescriptor"]]:
        """
        List the models of one provider.

        Fails with ``provider_not_found`` without any HTTP call when the
        name is not registered.
        """
        provider = self._resolve(provider_name)
        if provider is None:
            return ApiResult.from_error(ProviderNotFoundError(provider_name).to_api_error())
        return await provider.fetch_models()

    async def generate_summary(
        self,
        provider_name: str,
        content: str,
        model: str | None = None,
    ) -> ApiResult[str]:
        """
        Generate a meta description for ``content``.

        The content is sanitized and truncated, wrapped in the provider's
        instruction and sent to the provider.

        Args:
            provider_name: Registered provider name
            content: Raw post content (HTML allowed)
            model: Model for this call only (defaults to the configured model)

        Returns:
            ApiResult with the summary text or a failure
        """
        provider = self._resolve(provider_name)
        if provider is None:
            return ApiResult.from_error(ProviderNotFoundError(provider_name).to_api_error())

        text = sanitize_text(content, max_length=self._settings.MAX_CONTENT_LENGTH)
        if not text:
            return ApiResult.from_error(
                ValidationError("Content to summarize is empty.").to_api_error()
            )

        prompt = build_summary_prompt(
            text,
            self._settings.MIN_DESCRIPTION_LENGTH,
            self._settings.MAX_DESCRIPTION_LENGTH,
            self._settings.custom_prompt_for(provider.name()),
        )
        model = (model or "").strip() or None
        logger.debug(
            "Summary requested | provider=%s | model=%s | chars=%d",
            provider.name(),
            model or provider.model,
            len(text),
        )
        return await provider.generate_summary(prompt, model=model)

    def list_providers(self) -> list["LLMProviderInterface"]:
        """All registered providers in registration order."""
        return self._registry.all()
