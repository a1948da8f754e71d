"""
Provider registry.

An explicitly constructed name -> provider mapping. It is built once at
startup by ``build_registry`` and passed to whoever needs it; there is no
module-level instance.
"""
from __future__ import annotations

from typing import Iterator

from meta_description.config import get_logger
from meta_description.providers.llm.interface import LLMProviderInterface

logger = get_logger("llm.registry")


class ProviderRegistry:
    """
    Name -> provider mapping that keeps insertion order.

    Registering a name twice replaces the earlier provider.
    """

    def __init__(self, providers: list[LLMProviderInterface] | None = None) -> None:
        self._providers: dict[str, LLMProviderInterface] = {}
        for provider in providers or []:
            self.register(provider)

    def register(self, provider: LLMProviderInterface) -> None:
        name = provider.name()
        if name in self._providers:
            logger.warning("Overriding registered provider: %s", name)
        self._providers[name] = provider

    def resolve(self, name: str) -> LLMProviderInterface | None:
        """Get a provider by name, or None when it is not registered."""
        return self._providers.get(name)

    def all(self) -> list[LLMProviderInterface]:
        """All providers in registration order."""
        return list(self._providers.values())

    def names(self) -> list[str]:
        return list(self._providers)

    def __contains__(self, name: object) -> bool:
        return name in self._providers

    def __len__(self) -> int:
        return len(self._providers)

    def __iter__(self) -> Iterator[LLMProviderInterface]:
        return iter(self.all())
