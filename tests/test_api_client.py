"""Tests for the ApiClient facade."""
from dataclasses import replace

import pytest

from meta_description.config import Settings
from meta_description.providers.llm import OpenAIProvider, ProviderRegistry
from meta_description.services.api_client import ApiClient

OPENAI_SUMMARY = {"choices": [{"message": {"content": "A short description."}}]}


class TestFetchModels:

    @pytest.mark.asyncio
    async def test_unknown_provider_makes_no_request(self, api_client, gateway):
        result = await api_client.fetch_models("unknown")

        assert not result.ok
        assert result.error.code == "provider_not_found"
        assert result.error.message == 'AI provider "unknown" is not registered or supported.'
        assert gateway.calls == []

    @pytest.mark.asyncio
    async def test_delegates_to_provider(self, api_client, gateway):
        gateway.queue_json({"data": [{"id": "gpt-4o"}]})

        result = await api_client.fetch_models("openai")

        assert [m.id for m in result.value] == ["gpt-4o"]
        assert gateway.last_call["url"] == "https://api.openai.com/v1/models"

    @pytest.mark.asyncio
    async def test_registered_provider_without_key(self, api_client, gateway):
        result = await api_client.fetch_models("mistral")

        assert result.error.code == "api_key_missing"
        assert gateway.calls == []


class TestGenerateSummary:

    @pytest.mark.asyncio
    async def test_unknown_provider(self, api_client, gateway):
        result = await api_client.generate_summary("cohere", "Some content")

        assert result.error.code == "provider_not_found"
        assert gateway.calls == []

    @pytest.mark.asyncio
    async def test_content_is_sanitized_and_wrapped_in_prompt(self, api_client, gateway):
        gateway.queue_json(OPENAI_SUMMARY)

        result = await api_client.generate_summary(
            "openai",
            "<h1>Tea</h1><script>track()</script><p>Green &amp; black tea guide.</p>",
        )

        assert result.value == "A short description."
        prompt = gateway.last_call["body"]["messages"][0]["content"]
        assert "between 120 and 160 characters" in prompt
        assert "track()" not in prompt
        assert "<p>" not in prompt
        assert "Green & black tea guide." in prompt

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "   ", "<p> </p>", "<script>x()</script>"])
    async def test_empty_content_is_validation_error(self, api_client, gateway, content):
        result = await api_client.generate_summary("openai", content)

        assert result.error.code == "validation_error"
        assert gateway.calls == []

    @pytest.mark.asyncio
    async def test_content_is_truncated(self, make_provider, gateway):
        settings = Settings(_env_file=None, MAX_CONTENT_LENGTH=100)
        client = ApiClient(ProviderRegistry([make_provider(OpenAIProvider)]), settings)
        gateway.queue_json(OPENAI_SUMMARY)

        await client.generate_summary("openai", "word " * 200)

        prompt = gateway.last_call["body"]["messages"][0]["content"]
        content = prompt.split(": ", 1)[1]
        assert len(content) <= 100

    @pytest.mark.asyncio
    async def test_custom_prompt_per_provider(self, make_provider, gateway):
        settings = Settings(
            _env_file=None,
            OPENAI_CUSTOM_PROMPT="Write at most {max_length} characters",
            MAX_DESCRIPTION_LENGTH=150,
        )
        client = ApiClient(ProviderRegistry([make_provider(OpenAIProvider)]), settings)
        gateway.queue_json(OPENAI_SUMMARY)

        await client.generate_summary("openai", "Body text")

        prompt = gateway.last_call["body"]["messages"][0]["content"]
        assert prompt == "Write at most 150 characters: Body text"

    @pytest.mark.asyncio
    async def test_model_override(self, api_client, gateway):
        gateway.queue_json(OPENAI_SUMMARY)
        gateway.queue_json(OPENAI_SUMMARY)

        await api_client.generate_summary("openai", "Body", model="gpt-4o")
        overridden = gateway.last_call["body"]["model"]
        await api_client.generate_summary("openai", "Body", model="  ")

        assert overridden == "gpt-4o"
        assert gateway.last_call["body"]["model"] == "gpt-3.5-turbo"

    @pytest.mark.asyncio
    async def test_failure_does_not_affect_next_call(self, api_client, gateway):
        gateway.queue_json({"choices": []})
        gateway.queue_json(OPENAI_SUMMARY)

        failed = await api_client.generate_summary("openai", "Body")
        succeeded = await api_client.generate_summary("openai", "Body")

        assert failed.error.code == "parse_error"
        assert succeeded.value == "A short description."


class TestListProviders:

    def test_registration_order(self, api_client):
        assert [p.name() for p in api_client.list_providers()] == ["gemini", "mistral", "openai"]


class TestProvidersOutsideSettings:
    """Providers registered under names that have no settings entries."""

    @pytest.mark.asyncio
    async def test_summary_uses_default_instruction(self, make_provider, gateway, test_settings):
        class InHouseProvider(OpenAIProvider):
            identity = replace(OpenAIProvider.identity, name="in-house", title="In-house")

        registry = ProviderRegistry([make_provider(InHouseProvider)])
        client = ApiClient(registry, test_settings)
        gateway.queue_json(OPENAI_SUMMARY)

        result = await client.generate_summary("in-house", "Body")

        assert result.ok
        assert result.value == "A short description."
        prompt = gateway.last_call["body"]["messages"][0]["content"]
        assert prompt.startswith("Summarize the following text")


class TestFailureStatus:
    """Only vendor HTTP failures carry a status."""

    @pytest.mark.asyncio
    async def test_unknown_provider_has_no_status(self, api_client):
        result = await api_client.fetch_models("unknown")

        assert result.error.status is None

    @pytest.mark.asyncio
    async def test_missing_key_and_validation_have_no_status(self, api_client):
        missing_key = await api_client.fetch_models("mistral")
        empty = await api_client.generate_summary("openai", " ")

        assert missing_key.error.status is None
        assert empty.error.status is None

    @pytest.mark.asyncio
    async def test_parse_error_has_no_status(self, api_client, gateway):
        gateway.queue_json({"choices": [{}]})

        result = await api_client.generate_summary("openai", "Body")

        assert result.error.code == "parse_error"
        assert result.error.status is None
