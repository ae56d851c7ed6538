"""Main entry point for the Smart Set REST API."""

import uvicorn

from smartset.api.app import create_app
from smartset.config import get_logger, get_settings

logger = get_logger(__name__)


def main(host: str | None = None, port: int | None = None) -> None:
    """Run the FastAPI application."""
    settings = get_settings()
    app = create_app(settings)
    host = host or settings.api_host
    port = port or settings.api_port

    logger.info(
        "Starting Smart Set API server",
        host=host,
        port=port,
        environment=settings.environment,
    )

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level="info" if settings.debug else "warning",
    )


if __name__ == "__main__":
    main()
