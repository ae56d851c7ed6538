"""LLM client used by the breakdown, optimization and suggestion features."""

from __future__ import annotations

import json
from typing import Any

from smartset.config import SmartSetSettings, get_logger
from smartset.exceptions import LLMResponseError
from smartset.llm.base import BaseLLMProvider
from smartset.llm.fallback import FallbackHandler
from smartset.llm.models import GenerationRequest, GenerationResponse
from smartset.llm.providers import GeminiProvider

logger = get_logger(__name__)

DEFAULT_PREVIEW_CHARS = 1500


def parse_json_response(
    text: str, model: str | None = None, preview_chars: int = DEFAULT_PREVIEW_CHARS
) -> dict[str, Any]:
    """Parse a model answer that must be a single JSON object.

    Raises:
        LLMResponseError: If the text is not a JSON object
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise LLMResponseError(
            message=f"Model returned invalid JSON: {e.msg}",
            raw_preview=text[:preview_chars],
            model=model,
        ) from e
    if not isinstance(data, dict):
        raise LLMResponseError(
            message="Model returned JSON that is not an object",
            raw_preview=text[:preview_chars],
            model=model,
        )
    return data


class LLMClient:
    """Generation with model fallback and strict JSON decoding."""

    def __init__(
        self,
        provider: BaseLLMProvider,
        models: list[str],
        temperature: float = 0.2,
        preview_chars: int = DEFAULT_PREVIEW_CHARS,
    ) -> None:
        """Initialize LLM client.

        Args:
            provider: Provider serving the models
            models: Model chain, primary first
            temperature: Sampling temperature for every request
            preview_chars: Length of raw output kept in errors
        """
        self.provider = provider
        self.models = models
        self.temperature = temperature
        self.preview_chars = preview_chars
        self.fallback = FallbackHandler(provider, models)

    @classmethod
    def from_settings(cls, settings: SmartSetSettings) -> LLMClient:
        """Build a Gemini-backed client from settings."""
        provider = GeminiProvider(
            api_key=settings.llm_api_key,
            endpoint=settings.llm_endpoint,
            timeout=settings.llm_timeout,
        )
        return cls(
            provider,
            settings.model_chain,
            temperature=settings.llm_temperature,
            preview_chars=settings.job_raw_preview_chars,
        )

    @property
    def primary_model(self) -> str:
        return self.models[0]

    async def has_credentials(self) -> bool:
        """Whether a credential is configured."""
        return await self.provider.is_available()

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        """Generate text, falling back through the model chain."""
        request = request.model_copy(update={"temperature": self.temperature})
        return await self.fallback.generate_with_fallback(request)

    async def generate_json(
        self, request: GenerationRequest
    ) -> tuple[dict[str, Any], GenerationResponse]:
        """Generate and decode a JSON object.

        Returns:
            Decoded object and the raw response it came from
        """
        response = await self.generate(request)
        data = parse_json_response(response.text, response.model, self.preview_chars)
        return data, response

    async def ping(self) -> GenerationResponse:
        """Send a trivial prompt to the primary model only."""
        request = GenerationRequest(
            model=self.primary_model, prompt="ping", response_mime_type=None
        )
        return await self.provider.generate(request)

    async def aclose(self) -> None:
        """Release provider resources."""
        await self.provider.aclose()
