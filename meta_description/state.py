"""
Application state.

Holds the objects built once at startup: the HTTP gateway, the provider
registry and the API client facade. Nothing here is a module-level global;
the instance lives on ``app.state.app_state``.
"""
from __future__ import annotations

from dataclasses import dataclass

from meta_description.config import Settings, get_logger, get_settings
from meta_description.providers.gateway import HttpGateway
from meta_description.providers.llm import ProviderRegistry, build_registry
from meta_description.services.api_client import ApiClient

logger = get_logger("state")


@dataclass
class AppState:
    """Central container for shared application resources."""
    settings: Settings
    gateway: HttpGateway
    registry: ProviderRegistry
    api_client: ApiClient

    @classmethod
    def create(cls, settings: Settings | None = None) -> "AppState":
        """
        Build the gateway, registry and facade from configuration.

        Args:
            settings: Settings to use (defaults to the cached settings)

        Returns:
            Initialized AppState instance
        """
        settings = settings or get_settings()
        gateway = HttpGateway(default_timeout=settings.SUMMARY_TIMEOUT_SECONDS)
        registry = build_registry(settings, gateway)
        api_client = ApiClient(registry, settings)

        logger.info(
            "Providers: %d registered | %d with API key",
            len(registry),
            sum(1 for p in registry.all() if p.is_available()),
        )
        return cls(
            settings=settings,
            gateway=gateway,
            registry=registry,
            api_client=api_client,
        )

    def is_ready(self) -> bool:
        """Ready when at least one registered provider has an API key."""
        return any(provider.is_available() for provider in self.registry.all())
