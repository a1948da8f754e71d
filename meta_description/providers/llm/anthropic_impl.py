"""
Anthropic provider implementation.

Uses the Messages API. Authentication is the ``x-api-key`` header plus a
pinned ``anthropic-version``; the Bearer header is not sent.
"""
from __future__ import annotations

from typing import Any

from ...config import get_logger
from ...exceptions import ParseError
from ...utils import dig, first_string, load_json
from ..gateway import build_url
from .interface import LLMProviderInterface, ModelDescriptor, ProviderIdentity
from .orchestration import first_text_block

logger = get_logger("llm.anthropic")

ANTHROPIC_VERSION = "2023-06-01"
MAX_TOKENS: int = 150
TEMPERATURE: float = 0.6


class AnthropicProvider(LLMProviderInterface):
    """Anthropic Messages API provider."""

    identity = ProviderIdentity(
        name="anthropic",
        title="Anthropic",
        api_base="https://api.anthropic.com/v1/",
        default_model="claude-3-sonnet-20240229",
        key_acquisition_url="https://console.anthropic.com",
    )

    def models_url(self) -> str:
        return build_url(self.identity.api_base, "models")

    def summary_url(self, model: str) -> str:
        return build_url(self.identity.api_base, "messages")

    def prepare_headers(self, headers: dict[str, str]) -> dict[str, str]:
        headers = {k: v for k, v in headers.items() if k != "Authorization"}
        headers["x-api-key"] = self.credentials.api_key
        headers["anthropic-version"] = ANTHROPIC_VERSION
        return headers

    def query_params(self) -> dict[str, str]:
        return {}

    def build_summary_request_body(self, prompt: str, model: str) -> dict[str, Any]:
        return {
            "model": model,
            "max_tokens": MAX_TOKENS,
            "temperature": TEMPERATURE,
            "messages": [{"role": "user", "content": prompt}],
        }

    def parse_model_list(self, data: Any) -> list[ModelDescriptor]:
        entries = dig(data, "data")
        if not isinstance(entries, list):
            raise ParseError('Unable to parse model list from anthropic: "data" array missing.')

        models: list[ModelDescriptor] = []
        for entry in entries:
            model_id = dig(entry, "id")
            if not isinstance(model_id, str) or not model_id:
                continue
            display_name = first_string(entry, ("display_name",)) or model_id
            models.append(ModelDescriptor(id=model_id, display_name=display_name))
        return models

    def parse_summary(self, data: Any) -> str:
        text = first_text_block(dig(data, "content"))
        if not isinstance(text, str):
            raise ParseError("anthropic response missing expected summary data or invalid format.")
        return text.strip()

    def extract_error_message(self, raw_body: str) -> str:
        return first_string(load_json(raw_body), ("error", "message"))
