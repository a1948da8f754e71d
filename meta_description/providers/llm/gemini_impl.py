"""
Gemini provider implementation.

Uses the Generative Language REST API (v1beta). The API key travels in the
``key`` query parameter, so the default Bearer header is removed.
"""
from __future__ import annotations

from typing import Any

from ...config import get_logger
from ...exceptions import ParseError
from ...utils import dig, first_string, load_json
from ..gateway import build_url
from .interface import LLMProviderInterface, ModelDescriptor, ProviderIdentity

logger = get_logger("llm.gemini")

MAX_OUTPUT_TOKENS: int = 90
TEMPERATURE: float = 0.6
REQUIRED_GENERATION_METHOD = "generateContent"
EXCLUDED_DISPLAY_PREFIX = "Gemini 1.0"
_MODEL_NAME_PREFIX = "models/"


class GeminiProvider(LLMProviderInterface):
    """Google Gemini generateContent provider."""

    identity = ProviderIdentity(
        name="gemini",
        title="Gemini",
        api_base="https://generativelanguage.googleapis.com/v1beta/",
        default_model="gemini-1.5-flash-latest",
        key_acquisition_url="https://aistudio.google.com/app/apikey",
    )

    def models_url(self) -> str:
        return build_url(self.identity.api_base, "models")

    def summary_url(self, model: str) -> str:
        model = model.removeprefix(_MODEL_NAME_PREFIX)
        return build_url(self.identity.api_base, f"models/{model}:generateContent")

    def prepare_headers(self, headers: dict[str, str]) -> dict[str, str]:
        headers = dict(headers)
        headers.pop("Authorization", None)
        return headers

    def query_params(self) -> dict[str, str]:
        return {"key": self.credentials.api_key}

    def build_summary_request_body(self, prompt: str, model: str) -> dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "maxOutputTokens": MAX_OUTPUT_TOKENS,
                "temperature": TEMPERATURE,
            },
        }

    def parse_model_list(self, data: Any) -> list[ModelDescriptor]:
        entries = dig(data, "models")
        if not isinstance(entries, list):
            raise ParseError('Unable to parse model list from gemini: "models" array missing.')

        models: list[ModelDescriptor] = []
        for entry in entries:
            if not _supports_summaries(entry):
                continue
            name = dig(entry, "name")
            if not isinstance(name, str) or not name:
                continue
            model_id = name.removeprefix(_MODEL_NAME_PREFIX)
            display_name = dig(entry, "displayName")
            models.append(
                ModelDescriptor(
                    id=model_id,
                    display_name=display_name if isinstance(display_name, str) and display_name else model_id,
                )
            )

        logger.debug("Kept %d of %d Gemini models", len(models), len(entries))
        return models

    def parse_summary(self, data: Any) -> str:
        text = dig(data, "candidates", 0, "content", "parts", 0, "text")
        if not isinstance(text, str):
            raise ParseError("gemini response missing expected summary data or invalid format.")
        return text.strip()

    def extract_error_message(self, raw_body: str) -> str:
        data = load_json(raw_body)
        # Errors sometimes arrive wrapped in a one-element list
        if isinstance(data, list) and data:
            data = data[0]
        return first_string(data, ("error", "message"), ("error", "status"))


def _supports_summaries(entry: Any) -> bool:
    """Keep models that can generateContent, excluding the retired 1.0 family."""
    methods = dig(entry, "supportedGenerationMethods")
    if not isinstance(methods, list) or REQUIRED_GENERATION_METHOD not in methods:
        return False
    display_name = dig(entry, "displayName")
    return not (isinstance(display_name, str) and display_name.startswith(EXCLUDED_DISPLAY_PREFIX))
