"""Main API v1 router."""

from fastapi import APIRouter

from smartset.api.v1.endpoints import (
    ai,
    events,
    imports,
    manual,
    projects,
    scenes,
    stripboards,
)

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
api_router.include_router(events.router, prefix="/projects", tags=["calendar"])
api_router.include_router(manual.router, prefix="/projects", tags=["manual-board"])
api_router.include_router(imports.router, prefix="/projects", tags=["import"])
api_router.include_router(scenes.router, prefix="/scenes", tags=["scenes"])
api_router.include_router(
    stripboards.router, prefix="/stripboards", tags=["stripboards"]
)
api_router.include_router(ai.router, prefix="/ai", tags=["ai"])
