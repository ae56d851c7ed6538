"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from smartset import __version__
from smartset.api.v1.api import api_router
from smartset.breakdown.jobs import BreakdownJobRunner, JobStore
from smartset.config import SmartSetSettings, get_logger, get_settings
from smartset.llm import LLMClient
from smartset.scheduling import StripboardScheduler
from smartset.storage import ProductionStore

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Starting Smart Set API")
    settings: SmartSetSettings = app.state.settings

    store = ProductionStore.from_settings(settings)
    llm_client = app.state.llm_client or LLMClient.from_settings(settings)
    jobs = JobStore(ttl_seconds=settings.job_ttl_seconds)

    app.state.store = store
    app.state.scheduler = StripboardScheduler(store)
    app.state.llm_client = llm_client
    app.state.job_runner = BreakdownJobRunner(jobs, llm_client)

    yield

    # Cleanup on shutdown
    logger.info("Shutting down Smart Set API")
    await llm_client.aclose()
    store.close()


def create_app(
    settings: SmartSetSettings | None = None,
    llm_client: LLMClient | None = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        settings: Settings to use instead of the global ones
        llm_client: Client to use instead of one built from settings
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Smart Set API",
        description="Film production breakdown and stripboard scheduling",
        version=__version__,
        lifespan=lifespan,
        docs_url="/api/v1/docs",
        redoc_url="/api/v1/redoc",
        openapi_url="/api/v1/openapi.json",
    )
    app.state.settings = settings
    app.state.llm_client = llm_client

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include API routers
    app.include_router(api_router, prefix="/api/v1")

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {
            "message": "Smart Set API",
            "version": __version__,
            "docs": "/api/v1/docs",
        }

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app
