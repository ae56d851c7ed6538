"""Base class for LLM providers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from smartset.llm.models import GenerationRequest, GenerationResponse


class BaseLLMProvider(ABC):
    """Base class for LLM providers."""

    name: str

    @abstractmethod
    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        """Generate content with the model named in the request."""
        pass

    @abstractmethod
    async def is_available(self) -> bool:
        """Check if provider is configured."""
        pass

    async def aclose(self) -> None:  # noqa: B027
        """Release network resources."""
