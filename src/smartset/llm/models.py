"""Data models for LLM integration."""

from typing import Any

from pydantic import BaseModel, Field

JSON_MIME_TYPE = "application/json"
PDF_MIME_TYPE = "application/pdf"


class InlineData(BaseModel):
    """Binary document sent along with the prompt (base64 encoded)."""

    mime_type: str = PDF_MIME_TYPE
    data: str


class GenerationRequest(BaseModel):
    """Request for one content generation call."""

    model: str = ""
    prompt: str
    system: str | None = None
    inline_data: list[InlineData] = Field(default_factory=list)
    temperature: float = 0.2
    response_mime_type: str | None = JSON_MIME_TYPE
    response_schema: dict[str, Any] | None = None


class GenerationResponse(BaseModel):
    """Text returned by a model."""

    model: str
    text: str
    finish_reason: str | None = None
    usage: dict[str, Any] = Field(default_factory=dict)
