"""
Abstract interface for AI summary providers.

Every vendor adapter implements the same capability set: where its endpoints
live, how its headers and request bodies look, and how its responses and
error bodies are parsed. The request flow itself (key check, gateway call,
error enrichment, parsing) lives in ``orchestration`` and is shared by all
variants instead of being inherited hook by hook.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Any, ClassVar

from meta_description.providers.gateway import HttpGateway
from meta_description.providers.llm import orchestration
from meta_description.result import ApiResult

DEFAULT_MODELS_TIMEOUT_SECONDS: float = 15.0
DEFAULT_SUMMARY_TIMEOUT_SECONDS: float = 30.0


@dataclass(frozen=True)
class ProviderIdentity:
    """Immutable per-vendor constants."""
    name: str  # unique lowercase key, e.g. "gemini"
    title: str
    api_base: str
    default_model: str
    key_acquisition_url: str


@dataclass(frozen=True)
class ProviderCredentials:
    """API key and selected model, supplied by configuration at construction time."""
    api_key: str
    model: str

    def with_model(self, model: str) -> "ProviderCredentials":
        return replace(self, model=model)

    def __repr__(self) -> str:
        return f"ProviderCredentials(api_key={'***' if self.api_key else ''!r}, model={self.model!r})"


@dataclass(frozen=True)
class ModelDescriptor:
    """One selectable model returned by ``fetch_models``."""
    id: str
    display_name: str

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "displayName": self.display_name}


class LLMProviderInterface(ABC):
    """
    Abstract interface for AI summary providers.

    All implementations must provide:
    - Endpoint URLs for the model list and the summary call
    - Authentication (headers and/or query parameters)
    - Request body construction for a summary
    - Parsing of model lists, summaries and error bodies

    Instances are read-only after construction, so one provider can serve
    concurrent callers. A different model can be used for a single call
    through ``generate_summary(prompt, model=...)``.
    """

    identity: ClassVar[ProviderIdentity]

    def __init__(
        self,
        credentials: ProviderCredentials,
        gateway: HttpGateway,
        *,
        models_timeout: float = DEFAULT_MODELS_TIMEOUT_SECONDS,
        summary_timeout: float = DEFAULT_SUMMARY_TIMEOUT_SECONDS,
    ) -> None:
        if not credentials.model:
            credentials = credentials.with_model(self.identity.default_model)
        self._credentials = credentials
        self._gateway = gateway
        self._models_timeout = models_timeout
        self._summary_timeout = summary_timeout

    # -------------------------------------------------------------------------
    # Identity
    # -------------------------------------------------------------------------

    def name(self) -> str:
        """Get the unique provider name (e.g., 'gemini', 'openai')."""
        return self.identity.name

    def title(self) -> str:
        """Get the human-readable provider label."""
        return self.identity.title

    def default_model(self) -> str:
        return self.identity.default_model

    def key_acquisition_url(self) -> str:
        """Where a user obtains an API key for this provider."""
        return self.identity.key_acquisition_url

    @property
    def credentials(self) -> ProviderCredentials:
        return self._credentials

    @property
    def model(self) -> str:
        return self._credentials.model

    @property
    def gateway(self) -> HttpGateway:
        return self._gateway

    @property
    def models_timeout(self) -> float:
        return self._models_timeout

    @property
    def summary_timeout(self) -> float:
        return self._summary_timeout

    def is_available(self) -> bool:
        """Check if the provider is usable (has an API key)."""
        return bool(self._credentials.api_key)

    # -------------------------------------------------------------------------
    # Capability set (vendor specific)
    # -------------------------------------------------------------------------

    @abstractmethod
    def models_url(self) -> str:
        """Absolute URL of the vendor's list-models endpoint."""
        pass

    @abstractmethod
    def summary_url(self, model: str) -> str:
        """Absolute URL of the vendor's completion endpoint for ``model``."""
        pass

    @abstractmethod
    def prepare_headers(self, headers: dict[str, str]) -> dict[str, str]:
        """
        Adjust the default header set.

        Args:
            headers: Content-Type and Bearer Authorization defaults

        Returns:
            Headers to send
        """
        pass

    @abstractmethod
    def query_params(self) -> dict[str, str]:
        """Query parameters added to every request (auth for key-in-URL vendors)."""
        pass

    @abstractmethod
    def build_summary_request_body(self, prompt: str, model: str) -> dict[str, Any]:
        """Build the JSON body for a summary request."""
        pass

    @abstractmethod
    def parse_model_list(self, data: Any) -> list[ModelDescriptor]:
        """
        Extract models from a list-models response.

        Raises:
            ParseError: If the expected array is missing
        """
        pass

    @abstractmethod
    def parse_summary(self, data: Any) -> str:
        """
        Extract the trimmed summary text from a completion response.

        Raises:
            ParseError: If the text is absent, null or not a string
        """
        pass

    @abstractmethod
    def extract_error_message(self, raw_body: str) -> str:
        """Best-effort message from a failed response body ("" when none)."""
        pass

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def fetch_models(self) -> ApiResult[list[ModelDescriptor]]:
        """List the vendor's models usable for summaries."""
        return await orchestration.fetch_models(self)

    async def generate_summary(
        self,
        prompt: str,
        model: str | None = None,
    ) -> ApiResult[str]:
        """
        Generate a summary for an already-built prompt.

        Args:
            prompt: Full prompt text (instruction + content)
            model: Model for this call only (defaults to the configured model)
        """
        return await orchestration.generate_summary(self, prompt, model=model)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name()!r}, model={self.model!r})"
