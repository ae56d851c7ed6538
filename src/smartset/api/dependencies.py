"""Request dependencies and error translation shared by the endpoints."""

from fastapi import HTTPException, Request

from smartset.breakdown.jobs import BreakdownJobRunner
from smartset.config import SmartSetSettings
from smartset.exceptions import (
    JobNotFoundError,
    LLMCredentialError,
    LLMError,
    NotFoundError,
    SchedulingError,
    SmartSetError,
    ValidationError,
)
from smartset.llm import LLMClient
from smartset.scheduling import StripboardScheduler
from smartset.storage import ProductionStore


async def get_store(request: Request) -> ProductionStore:
    """Get the production store from app state."""
    store: ProductionStore = request.app.state.store
    return store


async def get_scheduler(request: Request) -> StripboardScheduler:
    """Get the stripboard scheduler from app state."""
    scheduler: StripboardScheduler = request.app.state.scheduler
    return scheduler


async def get_llm_client(request: Request) -> LLMClient:
    """Get the LLM client from app state."""
    client: LLMClient = request.app.state.llm_client
    return client


async def get_job_runner(request: Request) -> BreakdownJobRunner:
    """Get the breakdown job runner from app state."""
    runner: BreakdownJobRunner = request.app.state.job_runner
    return runner


async def get_app_settings(request: Request) -> SmartSetSettings:
    """Get the settings the app was created with."""
    settings: SmartSetSettings = request.app.state.settings
    return settings


def status_code_for(error: SmartSetError) -> int:
    """HTTP status for an application error."""
    if isinstance(error, NotFoundError | JobNotFoundError):
        return 404
    if isinstance(error, ValidationError | SchedulingError):
        return 400
    if isinstance(error, LLMCredentialError):
        return 401
    if isinstance(error, LLMError):
        return 502
    return 500


def http_error(error: SmartSetError) -> HTTPException:
    """Translate an application error into an HTTP error."""
    return HTTPException(status_code=status_code_for(error), detail=error.message)
