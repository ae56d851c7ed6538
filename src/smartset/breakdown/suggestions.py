"""AI suggestions of locations and props for a scene context."""

from __future__ import annotations

import pydantic
from pydantic import BaseModel, Field

from smartset.breakdown.prompts import (
    SUGGESTIONS_SCHEMA,
    SUGGESTIONS_SYSTEM,
    suggestions_prompt,
)
from smartset.config import get_logger
from smartset.exceptions import LLMResponseError, ValidationError
from smartset.llm import GenerationRequest, LLMClient

logger = get_logger(__name__)


class Suggestions(BaseModel):
    """Suggested production details for a scene."""

    locations: list[str] = Field(default_factory=list)
    props: list[str] = Field(default_factory=list)
    reasoning: str | None = None


async def suggest_elements(client: LLMClient, context: str) -> Suggestions:
    """Ask the model for locations and props implied by a scene context.

    Raises:
        ValidationError: If the context is empty
        LLMResponseError: If the answer does not match the expected shape
    """
    if not context or not context.strip():
        raise ValidationError(
            message="Scene context is missing",
            hint="Send a scene list, synopsis or scene details in 'context'",
        )
    data, response = await client.generate_json(
        GenerationRequest(
            prompt=suggestions_prompt(context.strip()),
            system=SUGGESTIONS_SYSTEM,
            response_schema=SUGGESTIONS_SCHEMA,
        )
    )
    try:
        suggestions = Suggestions.model_validate(data)
    except pydantic.ValidationError as e:
        raise LLMResponseError(
            message="Model returned malformed suggestions",
            raw_preview=response.text[: client.preview_chars],
            model=response.model,
        ) from e
    logger.info(
        "Generated suggestions",
        model=response.model,
        locations=len(suggestions.locations),
        props=len(suggestions.props),
    )
    return suggestions
