"""
Shared fixtures.

Providers and the API client are exercised against ``FakeGateway``, which
records every call and replays queued results, so no test touches the
network.
"""
from __future__ import annotations

from typing import Any

import pytest

from meta_description.config import Settings
from meta_description.providers.llm import ProviderCredentials, ProviderRegistry
from meta_description.result import ApiResult
from meta_description.services.api_client import ApiClient


class FakeGateway:
    """Stand-in for ``HttpGateway`` that records calls and replays results."""

    def __init__(self, *results: ApiResult[Any]) -> None:
        self._results = list(results)
        self.calls: list[dict[str, Any]] = []

    def queue(self, result: ApiResult[Any]) -> None:
        self._results.append(result)

    def queue_json(self, payload: Any) -> None:
        self.queue(ApiResult.success(payload))

    @property
    def last_call(self) -> dict[str, Any]:
        return self.calls[-1]

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers=None,
        body=None,
        params=None,
        timeout=None,
    ) -> ApiResult[Any]:
        self.calls.append(
            {
                "method": method,
                "url": url,
                "headers": dict(headers or {}),
                "body": body,
                "params": dict(params or {}),
                "timeout": timeout,
            }
        )
        if not self._results:
            raise AssertionError(f"Unexpected request: {method} {url}")
        return self._results.pop(0)


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def make_provider(gateway):
    """Build a provider class with a test key against the fake gateway."""

    def _make(provider_cls, api_key: str = "test-key", model: str = ""):
        return provider_cls(
            ProviderCredentials(api_key=api_key, model=model),
            gateway,
            models_timeout=15.0,
            summary_timeout=30.0,
        )

    return _make


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        GEMINI_API_KEY="gemini-key",
        MISTRAL_API_KEY="",
        OPENAI_API_KEY="sk-openai",
        ANTHROPIC_API_KEY="sk-ant",
        COHERE_API_KEY="",
        COHERE_ENABLED=False,
    )


@pytest.fixture
def api_client(make_provider, test_settings) -> ApiClient:
    from meta_description.providers.llm import GeminiProvider, MistralProvider, OpenAIProvider

    registry = ProviderRegistry(
        [
            make_provider(GeminiProvider),
            make_provider(MistralProvider, api_key=""),
            make_provider(OpenAIProvider),
        ]
    )
    return ApiClient(registry, test_settings)
