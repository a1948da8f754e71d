"""
Mistral provider implementation.

Mistral's chat API is OpenAI-compatible: Bearer authentication, a ``data``
model list and ``choices[0].message.content`` completions.
"""
from __future__ import annotations

from typing import Any

from ...config import get_logger
from ...exceptions import ParseError
from ...utils import dig, first_string, load_json
from ..gateway import build_url
from .interface import LLMProviderInterface, ModelDescriptor, ProviderIdentity

logger = get_logger("llm.mistral")

MAX_TOKENS: int = 70
TEMPERATURE: float = 0.6


class MistralProvider(LLMProviderInterface):
    """Mistral chat completions provider."""

    identity = ProviderIdentity(
        name="mistral",
        title="Mistral",
        api_base="https://api.mistral.ai/v1/",
        default_model="mistral-small-latest",
        key_acquisition_url="https://console.mistral.ai",
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
            raise ParseError('Unable to parse model list from mistral: "data" array missing.')

        models: list[ModelDescriptor] = []
        for entry in entries:
            model_id = dig(entry, "id")
            if not isinstance(model_id, str) or not model_id:
                continue
            display_name = dig(entry, "name")
            models.append(
                ModelDescriptor(
                    id=model_id,
                    display_name=display_name if isinstance(display_name, str) and display_name else model_id,
                )
            )
        return models

    def parse_summary(self, data: Any) -> str:
        text = dig(data, "choices", 0, "message", "content")
        if not isinstance(text, str):
            raise ParseError("mistral response missing expected summary data or invalid format.")
        return text.strip()

    def extract_error_message(self, raw_body: str) -> str:
        return first_string(
            load_json(raw_body),
            ("message",),
            ("error", "message"),
            ("detail",),
            ("detail", 0, "msg"),
        )
