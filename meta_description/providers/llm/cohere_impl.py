"""
Cohere provider implementation.

Summaries use the v2 Chat API. Cohere v2 has no model listing endpoint, so
the model list comes from v1, restricted to chat-capable models.
"""
from __future__ import annotations

from typing import Any

from ...config import get_logger
from ...exceptions import ParseError
from ...utils import dig, first_string, load_json
from ..gateway import build_url
from .interface import LLMProviderInterface, ModelDescriptor, ProviderIdentity
from .orchestration import first_text_block

logger = get_logger("llm.cohere")

COHERE_VERSION = "2022-12-06"
MODELS_ENDPOINT = "https://api.cohere.ai/v1/models?endpoint=chat"


class CohereProvider(LLMProviderInterface):
    """Cohere Chat v2 provider."""

    identity = ProviderIdentity(
        name="cohere",
        title="Cohere",
        api_base="https://api.cohere.ai/v2/",
        default_model="command-a-03-2025",
        key_acquisition_url="https://dashboard.cohere.com",
    )

    def models_url(self) -> str:
        return build_url(self.identity.api_base, MODELS_ENDPOINT)

    def summary_url(self, model: str) -> str:
        return build_url(self.identity.api_base, "chat")

    def prepare_headers(self, headers: dict[str, str]) -> dict[str, str]:
        headers = dict(headers)
        headers["Cohere-Version"] = COHERE_VERSION
        headers["accept"] = "application/json"
        return headers

    def query_params(self) -> dict[str, str]:
        return {}

    def build_summary_request_body(self, prompt: str, model: str) -> dict[str, Any]:
        return {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "stream": False,
        }

    def parse_model_list(self, data: Any) -> list[ModelDescriptor]:
        entries = dig(data, "models")
        if not isinstance(entries, list):
            raise ParseError('Unable to parse model list from cohere: "models" array missing.')

        names = [dig(entry, "name") for entry in entries]
        return [
            ModelDescriptor(id=name, display_name=name)
            for name in names
            if isinstance(name, str) and name
        ]

    def parse_summary(self, data: Any) -> str:
        text = first_text_block(dig(data, "message", "content"))
        if not isinstance(text, str):
            raise ParseError("cohere response missing expected summary data or invalid format.")
        return text.strip()

    def extract_error_message(self, raw_body: str) -> str:
        return first_string(load_json(raw_body), ("message",))
