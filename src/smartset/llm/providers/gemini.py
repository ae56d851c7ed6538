"""Google Gemini REST provider."""

from __future__ import annotations

from typing import Any

import httpx

from smartset.config import get_logger
from smartset.exceptions import LLMCredentialError, LLMError
from smartset.llm.base import BaseLLMProvider
from smartset.llm.models import GenerationRequest, GenerationResponse

logger = get_logger(__name__)

DEFAULT_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta"


class GeminiProvider(BaseLLMProvider):
    """Calls the ``generateContent`` method of the Gemini REST API."""

    name = "gemini"

    def __init__(
        self,
        api_key: str | None,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: float = 120.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize Gemini provider.

        Args:
            api_key: Gemini API key; calls fail with a credential error without it
            endpoint: API base URL
            timeout: HTTP request timeout in seconds
            client: Optional preconfigured HTTP client
        """
        self.api_key = api_key or ""
        self.base_url = endpoint.rstrip("/")
        self.timeout = timeout
        self.client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

        logger.debug(
            "Initialized Gemini provider",
            endpoint=self.base_url,
            has_api_key=bool(self.api_key),
            timeout=timeout,
        )

    async def is_available(self) -> bool:
        """Check that an API key is configured."""
        return bool(self.api_key)

    async def aclose(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    def build_payload(self, request: GenerationRequest) -> dict[str, Any]:
        """Translate a generation request into a ``generateContent`` body."""
        parts: list[dict[str, Any]] = [
            {"inline_data": {"mime_type": item.mime_type, "data": item.data}}
            for item in request.inline_data
        ]
        parts.append({"text": request.prompt})

        generation_config: dict[str, Any] = {"temperature": request.temperature}
        if request.response_mime_type:
            generation_config["responseMimeType"] = request.response_mime_type
        if request.response_schema:
            generation_config["responseSchema"] = request.response_schema

        payload: dict[str, Any] = {
            "contents": [{"role": "user", "parts": parts}],
            "generationConfig": generation_config,
        }
        if request.system:
            payload["systemInstruction"] = {"parts": [{"text": request.system}]}
        return payload

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        """Generate content using the Gemini API.

        Raises:
            LLMCredentialError: If no API key is configured
            LLMError: On transport errors, non-200 answers or empty candidates
        """
        if not self.api_key:
            raise LLMCredentialError()

        url = f"{self.base_url}/models/{request.model}:generateContent"
        headers = {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }
        logger.info(
            "Sending Gemini request",
            model=request.model,
            inline_documents=len(request.inline_data),
            json_output=request.response_mime_type is not None,
        )

        try:
            response = await self.client.post(
                url, headers=headers, json=self.build_payload(request)
            )
        except httpx.HTTPError as e:
            logger.error(
                "Gemini request failed",
                error=str(e),
                error_type=type(e).__name__,
                model=request.model,
            )
            raise LLMError(
                message=f"Gemini request failed: {e}",
                details={"model": request.model},
            ) from e

        if response.status_code != 200:
            error_text = response.text
            logger.error(
                "Gemini API error",
                status_code=response.status_code,
                error_text=error_text[:500],
                model=request.model,
            )
            raise LLMError(
                message=f"Gemini API error ({response.status_code})",
                details={"model": request.model, "response": error_text[:500]},
            )

        data: dict[str, Any] = response.json()
        candidates: list[dict[str, Any]] = data.get("candidates") or []
        if not candidates:
            raise LLMError(
                message="Gemini returned no candidates",
                details={
                    "model": request.model,
                    "feedback": data.get("promptFeedback"),
                },
            )

        candidate = candidates[0]
        text = "".join(
            part.get("text", "")
            for part in candidate.get("content", {}).get("parts", [])
        )
        logger.info(
            "Gemini request successful",
            model=data.get("modelVersion", request.model),
            response_length=len(text),
            finish_reason=candidate.get("finishReason"),
        )
        return GenerationResponse(
            model=request.model,
            text=text,
            finish_reason=candidate.get("finishReason"),
            usage=data.get("usageMetadata", {}),
        )
