"""Project, scene list and element endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from smartset.api.dependencies import get_scheduler, get_store, http_error
from smartset.api.v1.schemas import (
    ElementCreateRequest,
    ProjectCreateRequest,
    StripboardSummaryResponse,
)
from smartset.config import get_logger
from smartset.exceptions import SmartSetError
from smartset.models import ProductionElement, Project, Scene, ScriptVersion
from smartset.scheduling import StripboardScheduler
from smartset.storage import ProductionStore

logger = get_logger(__name__)
router = APIRouter()


@router.get("/", response_model=list[Project])
async def list_projects(
    store: ProductionStore = Depends(get_store),
) -> list[Project]:
    """List all projects."""
    try:
        return store.get_projects()
    except Exception as e:
        logger.error("Failed to list projects", error=str(e))
        raise HTTPException(status_code=500, detail="Failed to list projects") from e


@router.post("/", response_model=Project, status_code=201)
async def create_project(
    request: ProjectCreateRequest,
    store: ProductionStore = Depends(get_store),
) -> Project:
    """Create a project."""
    try:
        return store.create_project(
            name=request.name, type=request.type, shoot_days=request.shoot_days
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        logger.error("Failed to create project", error=str(e))
        raise HTTPException(status_code=500, detail="Failed to create project") from e


@router.get("/{project_id}", response_model=Project)
async def get_project(
    project_id: str,
    store: ProductionStore = Depends(get_store),
) -> Project:
    """Get a project by ID."""
    try:
        return store.require_project(project_id)
    except SmartSetError as e:
        raise http_error(e) from e


@router.get("/{project_id}/scenes", response_model=list[Scene])
async def list_scenes(
    project_id: str,
    store: ProductionStore = Depends(get_store),
) -> list[Scene]:
    """List the scenes of a project in script order."""
    try:
        store.require_project(project_id)
        return store.get_project_scenes(project_id)
    except SmartSetError as e:
        raise http_error(e) from e


@router.get("/{project_id}/elements", response_model=list[ProductionElement])
async def list_elements(
    project_id: str,
    store: ProductionStore = Depends(get_store),
) -> list[ProductionElement]:
    """List the production elements of a project."""
    try:
        store.require_project(project_id)
        return store.get_elements(project_id)
    except SmartSetError as e:
        raise http_error(e) from e


@router.post(
    "/{project_id}/elements", response_model=ProductionElement, status_code=201
)
async def create_element(
    project_id: str,
    request: ElementCreateRequest,
    store: ProductionStore = Depends(get_store),
) -> ProductionElement:
    """Add an element; its free-text category is classified on creation."""
    try:
        store.require_project(project_id)
        return store.add_element(project_id, request.name, request.category)
    except SmartSetError as e:
        raise http_error(e) from e


@router.delete("/{project_id}/elements/{element_id}")
async def delete_element(
    project_id: str,
    element_id: str,
    store: ProductionStore = Depends(get_store),
) -> dict[str, bool]:
    """Delete an element."""
    if not store.delete_element(element_id):
        raise HTTPException(status_code=404, detail="Element not found")
    return {"deleted": True}


@router.get(
    "/{project_id}/stripboards", response_model=list[StripboardSummaryResponse]
)
async def list_stripboards(
    project_id: str,
    store: ProductionStore = Depends(get_store),
    scheduler: StripboardScheduler = Depends(get_scheduler),
) -> list[StripboardSummaryResponse]:
    """List the stripboards of a project with scene, day and page totals."""
    try:
        store.require_project(project_id)
        return [
            StripboardSummaryResponse.from_summary(summary)
            for summary in scheduler.summaries(project_id)
        ]
    except SmartSetError as e:
        raise http_error(e) from e


@router.post(
    "/{project_id}/stripboards",
    response_model=StripboardSummaryResponse,
    status_code=201,
)
async def create_stripboard(
    project_id: str,
    name: str = "Main Board",
    store: ProductionStore = Depends(get_store),
    scheduler: StripboardScheduler = Depends(get_scheduler),
) -> StripboardSummaryResponse:
    """Create a board holding every scene of the project in script order."""
    try:
        store.require_project(project_id)
        scenes = store.get_project_scenes(project_id)
        board = store.create_default_stripboard(project_id, scenes, name=name)
        summaries = {s.board_id: s for s in scheduler.summaries(project_id)}
        return StripboardSummaryResponse.from_summary(summaries[board.id])
    except SmartSetError as e:
        raise http_error(e) from e


@router.get("/{project_id}/scripts", response_model=list[ScriptVersion])
async def list_script_versions(
    project_id: str,
    store: ProductionStore = Depends(get_store),
) -> list[ScriptVersion]:
    """List imported script versions."""
    try:
        store.require_project(project_id)
        return store.get_script_versions(project_id)
    except SmartSetError as e:
        raise http_error(e) from e
