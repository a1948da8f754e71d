"""
LLM Provider - Static registration of the summary providers.

Every supported vendor is listed in ``PROVIDER_CLASSES``. ``build_registry``
constructs the enabled ones from configuration and returns a registry the
caller owns.
"""
from __future__ import annotations

from meta_description.config import Settings, get_logger
from meta_description.providers.gateway import HttpGateway

from .anthropic_impl import AnthropicProvider
from .cohere_impl import CohereProvider
from .gemini_impl import GeminiProvider
from .interface import (
    LLMProviderInterface,
    ModelDescriptor,
    ProviderCredentials,
    ProviderIdentity,
)
from .mistral_impl import MistralProvider
from .openai_impl import OpenAIProvider
from .registry import ProviderRegistry

logger = get_logger("llm.provider")

# Registration order is the order providers are listed to callers
PROVIDER_CLASSES: tuple[type[LLMProviderInterface], ...] = (
    GeminiProvider,
    MistralProvider,
    OpenAIProvider,
    AnthropicProvider,
    CohereProvider,
)


def build_registry(settings: Settings, gateway: HttpGateway) -> ProviderRegistry:
    """
    Construct every enabled provider and register it.

    Args:
        settings: Source of keys, models, enable flags and timeouts
        gateway: Shared HTTP gateway used by all providers

    Returns:
        A new ProviderRegistry
    """
    registry = ProviderRegistry()

    for provider_cls in PROVIDER_CLASSES:
        identity = provider_cls.identity
        if not settings.is_provider_enabled(identity.name):
            logger.info("Provider disabled: %s", identity.name)
            continue

        provider = provider_cls(
            settings.credentials_for(identity.name, identity.default_model),
            gateway,
            models_timeout=settings.MODELS_TIMEOUT_SECONDS,
            summary_timeout=settings.SUMMARY_TIMEOUT_SECONDS,
        )
        registry.register(provider)
        logger.info(
            "Provider registered: %s (model: %s, key: %s)",
            provider.title(),
            provider.model,
            "set" if provider.is_available() else "missing",
        )

    return registry


__all__ = [
    "PROVIDER_CLASSES",
    "AnthropicProvider",
    "CohereProvider",
    "GeminiProvider",
    "LLMProviderInterface",
    "MistralProvider",
    "ModelDescriptor",
    "OpenAIProvider",
    "ProviderCredentials",
    "ProviderIdentity",
    "ProviderRegistry",
    "build_registry",
]
