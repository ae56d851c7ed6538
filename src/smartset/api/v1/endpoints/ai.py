"""AI endpoints: breakdown, background jobs, suggestions and diagnostics."""

import os
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, HTTPException

from smartset.api.dependencies import (
    get_app_settings,
    get_job_runner,
    get_llm_client,
    http_error,
)
from smartset.api.v1.schemas import (
    BreakdownRequest,
    BreakdownResponse,
    EnvResponse,
    HealthResponse,
    JobStartResponse,
    SuggestionsRequest,
    SuggestionsResponse,
)
from smartset.breakdown.extractor import extract_breakdown, summarize_breakdown
from smartset.breakdown.jobs import BreakdownJobRunner
from smartset.breakdown.suggestions import suggest_elements
from smartset.config import SmartSetSettings, get_logger
from smartset.exceptions import LLMCredentialError, SmartSetError
from smartset.llm import LLMClient
from smartset.models import AnalysisJob

logger = get_logger(__name__)
router = APIRouter()

CREDENTIAL_VARIABLES = (
    "SMARTSET_LLM_API_KEY",
    "GEMINI_API_KEY",
    "API_KEY",
    "GOOGLE_API_KEY",
)


@router.post("/breakdown", response_model=BreakdownResponse)
async def breakdown(
    request: BreakdownRequest,
    client: LLMClient = Depends(get_llm_client),
) -> BreakdownResponse:
    """Break down a screenplay PDF and wait for the result."""
    try:
        result, response = await extract_breakdown(client, request.pdf_base64)
        return BreakdownResponse(
            data=result,
            summary=summarize_breakdown(result),
            model_used=response.model,
        )
    except SmartSetError as e:
        logger.warning("Breakdown failed", error=e.message)
        raise http_error(e) from e
    except Exception as e:
        logger.error("Breakdown crashed", error=str(e))
        raise HTTPException(status_code=500, detail="Breakdown failed") from e


@router.post("/breakdown/start", response_model=JobStartResponse)
async def start_breakdown(
    request: BreakdownRequest,
    runner: BreakdownJobRunner = Depends(get_job_runner),
) -> JobStartResponse:
    """Queue a breakdown job and return its id immediately."""
    try:
        job = await runner.start(request.pdf_base64)
        return JobStartResponse(job_id=job.id)
    except SmartSetError as e:
        raise http_error(e) from e


@router.get("/breakdown/status/{job_id}", response_model=AnalysisJob)
async def breakdown_status(
    job_id: str,
    runner: BreakdownJobRunner = Depends(get_job_runner),
) -> AnalysisJob:
    """Get the state of a breakdown job."""
    try:
        return runner.status(job_id)
    except SmartSetError as e:
        raise http_error(e) from e


@router.post("/suggestions", response_model=SuggestionsResponse)
async def suggestions(
    request: SuggestionsRequest,
    client: LLMClient = Depends(get_llm_client),
) -> SuggestionsResponse:
    """Suggest locations and props implied by a scene context."""
    try:
        return SuggestionsResponse(
            suggestions=await suggest_elements(client, request.context)
        )
    except SmartSetError as e:
        raise http_error(e) from e


@router.get("/health", response_model=HealthResponse)
async def health(
    client: LLMClient = Depends(get_llm_client),
) -> HealthResponse:
    """Ping the primary model."""
    if not await client.has_credentials():
        raise http_error(LLMCredentialError())
    try:
        response = await client.ping()
    except SmartSetError as e:
        logger.warning("AI health check failed", error=e.message)
        raise HTTPException(
            status_code=502,
            detail=HealthResponse(
                ok=False, model_id=client.primary_model, error=e.message
            ).model_dump(),
        ) from e
    return HealthResponse(
        ok=True, model_id=client.primary_model, text=response.text.strip()
    )


@router.get("/env", response_model=EnvResponse)
async def env(
    settings: SmartSetSettings = Depends(get_app_settings),
) -> EnvResponse:
    """Report which credential variables are set, never their values."""
    details = {name: bool(os.environ.get(name)) for name in CREDENTIAL_VARIABLES}
    return EnvResponse(
        environment=settings.environment,
        key_present=bool(settings.llm_api_key),
        details=details,
        primary_model=settings.llm_primary_model,
        fallback_models=settings.model_chain[1:],
        timestamp=datetime.now(UTC).isoformat(),
    )
