"""Calendar event endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from smartset.api.dependencies import get_store, http_error
from smartset.api.v1.schemas import EventCreateRequest, GenerateEventsRequest
from smartset.config import get_logger
from smartset.exceptions import SmartSetError
from smartset.models import CalendarEvent
from smartset.scheduling.events import (
    PlannedDay,
    generate_shooting_events,
    parse_scene_list,
)
from smartset.storage import ProductionStore

logger = get_logger(__name__)
router = APIRouter()


@router.get("/{project_id}/events", response_model=list[CalendarEvent])
async def list_events(
    project_id: str,
    store: ProductionStore = Depends(get_store),
) -> list[CalendarEvent]:
    """List calendar events of a project by date."""
    try:
        store.require_project(project_id)
        return store.get_events(project_id)
    except SmartSetError as e:
        raise http_error(e) from e


@router.post("/{project_id}/events", response_model=CalendarEvent, status_code=201)
async def create_event(
    project_id: str,
    request: EventCreateRequest,
    store: ProductionStore = Depends(get_store),
) -> CalendarEvent:
    """Create a calendar event."""
    try:
        store.require_project(project_id)
        event = CalendarEvent(project_id=project_id, **request.model_dump())
        store.save_event(event)
        return event
    except SmartSetError as e:
        raise http_error(e) from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@router.put("/{project_id}/events/{event_id}", response_model=CalendarEvent)
async def update_event(
    project_id: str,
    event_id: str,
    request: EventCreateRequest,
    store: ProductionStore = Depends(get_store),
) -> CalendarEvent:
    """Replace a calendar event."""
    existing = store.get_event(event_id)
    if existing is None or existing.project_id != project_id:
        raise HTTPException(status_code=404, detail="Event not found")
    try:
        event = CalendarEvent(
            id=event_id, project_id=project_id, **request.model_dump()
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    store.save_event(event)
    return event


@router.delete("/{project_id}/events/{event_id}")
async def delete_event(
    project_id: str,
    event_id: str,
    store: ProductionStore = Depends(get_store),
) -> dict[str, bool]:
    """Delete a calendar event."""
    existing = store.get_event(event_id)
    if existing is None or existing.project_id != project_id:
        raise HTTPException(status_code=404, detail="Event not found")
    store.delete_event(event_id)
    return {"deleted": True}


@router.post(
    "/{project_id}/events/generate",
    response_model=list[CalendarEvent],
    status_code=201,
)
async def generate_events(
    project_id: str,
    request: GenerateEventsRequest,
    store: ProductionStore = Depends(get_store),
) -> list[CalendarEvent]:
    """Create one shooting event per planned day that lists scenes."""
    try:
        plan = [
            PlannedDay(
                date=day.date,
                scenes=(
                    parse_scene_list(day.scenes)
                    if isinstance(day.scenes, str)
                    else [s.strip() for s in day.scenes if s.strip()]
                ),
            )
            for day in request.days
        ]
        return generate_shooting_events(store, project_id, plan)
    except SmartSetError as e:
        raise http_error(e) from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
