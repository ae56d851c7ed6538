"""LLM integration: Gemini provider, model fallback and JSON decoding."""

from smartset.llm.base import BaseLLMProvider
from smartset.llm.client import LLMClient, parse_json_response
from smartset.llm.fallback import FallbackHandler
from smartset.llm.models import GenerationRequest, GenerationResponse, InlineData

__all__ = [
    "BaseLLMProvider",
    "FallbackHandler",
    "GenerationRequest",
    "GenerationResponse",
    "InlineData",
    "LLMClient",
    "parse_json_response",
]
