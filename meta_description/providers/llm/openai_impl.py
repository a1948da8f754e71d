"""
OpenAI provider implementation.

Uses the Chat Completions API with Bearer authentication. The model list is
narrowed to the GPT-3.5 / GPT-4 chat families.
"""
from __future__ import annotations

from typing import Any

from ...config import get_logger
from ...exceptions import ParseError
from ...utils import dig, first_string, load_json
from ..gateway import build_url
from .interface import LLMProviderInterface, ModelDescriptor, ProviderIdentity

logger = get_logger("llm.openai")

MAX_TOKENS: int = 70
TEMPERATURE: float = 0.6
CHAT_MODEL_PREFIXES: tuple[str, ...] = ("gpt-3.5", "gpt-4")


class OpenAIProvider(LLMProviderInterface):
    """OpenAI Chat Completions provider."""

    identity = ProviderIdentity(
        name="openai",
        title="OpenAI",
        api_base="https://api.openai.com/v1/",
        default_model="gpt-3.5-turbo",
        key_acquisition_url="https://platform.openai.com",
    )

    def models_url(self) -> str:
        return build_url(self.identity.api_base, "models")

    def summary_url(self, model: str) -> str:
        return build_url(self.identity.api_base, "chat/completions")

    def prepare_headers(self, headers: dict[str, str]) -> dict[str, str]:
        return headers

    def query_params(self) -> dict[str, str]:
        return {}

    def build_summary_request_body(self, prompt: str, model: str) -> dict[str, Any]:
        return {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": MAX_TOKENS,
            "temperature": TEMPERATURE,
        }

    def parse_model_list(self, data: Any) -> list[ModelDescriptor]:
        entries = dig(data, "data")
        if not isinstance(entries, list):
            raise ParseError('Unable to parse model list from openai: "data" array missing.')

        models = [
            ModelDescriptor(id=entry["id"], display_name=entry["id"])
            for entry in entries
            if isinstance(entry, dict)
            and isinstance(entry.get("id"), str)
            and entry["id"].startswith(CHAT_MODEL_PREFIXES)
        ]
        logger.debug("Kept %d of %d OpenAI models", len(models), len(entries))
        return models

    def parse_summary(self, data: Any) -> str:
        text = dig(data, "choices", 0, "message", "content")
        if not isinstance(text, str):
            raise ParseError("openai response missing expected summary data or invalid format.")
        return text.strip()

    def extract_error_message(self, raw_body: str) -> str:
        return first_string(load_json(raw_body), ("error", "message"), ("error",))
