"""Screenplay breakdown through the LLM."""

from __future__ import annotations

import pydantic

from smartset.breakdown.categories import classify
from smartset.breakdown.prompts import BREAKDOWN_PROMPT, BREAKDOWN_SYSTEM
from smartset.config import get_logger
from smartset.exceptions import LLMResponseError, ValidationError
from smartset.llm import (
    GenerationRequest,
    InlineData,
    LLMClient,
    parse_json_response,
)
from smartset.llm.models import GenerationResponse
from smartset.models import BreakdownResult, BreakdownSummary, ElementCategory

logger = get_logger(__name__)

MIN_PDF_BASE64_LENGTH = 10


def estimate_input_bytes(pdf_base64: str) -> int:
    """Approximate decoded size of a base64 payload."""
    return len(pdf_base64) * 3 // 4


def check_pdf_payload(pdf_base64: str | None) -> str:
    """Reject missing or obviously truncated PDF payloads."""
    if not pdf_base64 or len(pdf_base64) < MIN_PDF_BASE64_LENGTH:
        raise ValidationError(
            message="PDF content is missing or invalid",
            hint="Send the screenplay as a base64 encoded PDF in 'pdfBase64'",
        )
    return pdf_base64


def build_breakdown_request(pdf_base64: str) -> GenerationRequest:
    return GenerationRequest(
        prompt=BREAKDOWN_PROMPT,
        system=BREAKDOWN_SYSTEM,
        inline_data=[InlineData(data=pdf_base64)],
    )


def parse_breakdown(
    text: str, model: str | None = None, preview_chars: int = 1500
) -> BreakdownResult:
    """Decode a breakdown answer, failing on anything but the expected shape.

    Raises:
        LLMResponseError: If the text is not JSON or does not match the shape
    """
    data = parse_json_response(text, model, preview_chars)
    try:
        return BreakdownResult.model_validate(data)
    except pydantic.ValidationError as e:
        raise LLMResponseError(
            message=(
                "Model returned an unexpected breakdown shape: "
                f"{e.error_count()} errors"
            ),
            raw_preview=text[:preview_chars],
            model=model,
        ) from e


def summarize_breakdown(result: BreakdownResult) -> BreakdownSummary:
    """Count scenes, distinct locations, cast members and props."""
    categories = [classify(element.category) for element in result.elements]
    return BreakdownSummary(
        scene_count=len(result.scenes),
        location_count=len({scene.location_name for scene in result.scenes}),
        cast_count=categories.count(ElementCategory.CAST),
        props_count=categories.count(ElementCategory.PROPS),
    )


async def extract_breakdown(
    client: LLMClient, pdf_base64: str
) -> tuple[BreakdownResult, GenerationResponse]:
    """Run a full breakdown of a base64 encoded screenplay PDF.

    Raises:
        ValidationError: If the payload is missing
        LLMCredentialError: If no API key is configured
        LLMFallbackError: If every model in the chain fails
        LLMResponseError: If the answer is not the expected JSON
    """
    check_pdf_payload(pdf_base64)
    logger.info(
        "Starting breakdown", input_bytes=estimate_input_bytes(pdf_base64)
    )
    response = await client.generate(build_breakdown_request(pdf_base64))
    result = parse_breakdown(response.text, response.model, client.preview_chars)
    logger.info(
        "Breakdown complete",
        model=response.model,
        scenes=len(result.scenes),
        elements=len(result.elements),
    )
    return result, response
