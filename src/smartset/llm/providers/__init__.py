"""LLM provider implementations."""

from smartset.llm.providers.gemini import GeminiProvider

__all__ = ["GeminiProvider"]
