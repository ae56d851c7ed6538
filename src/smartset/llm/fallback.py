"""Fallback across the configured model chain."""

from __future__ import annotations

from smartset.config import get_logger
from smartset.exceptions import LLMCredentialError, LLMFallbackError
from smartset.llm.base import BaseLLMProvider
from smartset.llm.models import GenerationRequest, GenerationResponse

logger = get_logger(__name__)


class FallbackHandler:
    """Tries the primary model, then each fallback model in order."""

    def __init__(self, provider: BaseLLMProvider, models: list[str]) -> None:
        """Initialize fallback handler.

        Args:
            provider: Provider that serves every model in the chain
            models: Model ids, primary first
        """
        self.provider = provider
        self.models = models

    async def generate_with_fallback(
        self, request: GenerationRequest
    ) -> GenerationResponse:
        """Generate with the first model in the chain that succeeds.

        The request's ``model`` field is overwritten for each attempt.

        Raises:
            LLMCredentialError: If no credential is configured
            LLMFallbackError: If every model fails
        """
        if not await self.provider.is_available():
            raise LLMCredentialError()

        model_errors: dict[str, Exception] = {}
        attempted_models: list[str] = []

        logger.info("Starting generation with fallback", model_chain=self.models)

        for index, model in enumerate(self.models):
            attempted_models.append(model)
            role = "primary" if index == 0 else "fallback"
            try:
                response = await self.provider.generate(
                    request.model_copy(update={"model": model})
                )
            except LLMCredentialError:
                raise
            except Exception as e:
                model_errors[model] = e
                logger.warning(
                    f"{role.capitalize()} model failed",
                    model=model,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                continue
            if index > 0:
                logger.info("Fallback model succeeded", model=model)
            return response

        logger.error(
            "All models failed",
            model_errors={k: str(v) for k, v in model_errors.items()},
            attempted_models=attempted_models,
        )
        raise LLMFallbackError(
            model_errors=model_errors,
            attempted_models=attempted_models,
        )
