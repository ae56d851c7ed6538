"""Stripboard scheduling endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from smartset.api.dependencies import (
    get_llm_client,
    get_scheduler,
    get_store,
    http_error,
)
from smartset.api.v1.schemas import (
    DaysRequest,
    DaysResponse,
    MoveRequest,
    MoveResponse,
    RenormalizeResponse,
    ScheduleResponse,
)
from smartset.config import get_logger
from smartset.exceptions import SmartSetError
from smartset.llm import LLMClient
from smartset.scheduling import StripboardScheduler
from smartset.scheduling.days import date_range
from smartset.scheduling.optimizer import optimize_stripboard
from smartset.storage import ProductionStore

logger = get_logger(__name__)
router = APIRouter()


def _schedule(scheduler: StripboardScheduler, board_id: str) -> ScheduleResponse:
    board, view = scheduler.view(board_id)
    return ScheduleResponse.from_view(board.id, board.project_id, board.name, view)


@router.get("/{board_id}", response_model=ScheduleResponse)
async def get_schedule(
    board_id: str,
    scheduler: StripboardScheduler = Depends(get_scheduler),
) -> ScheduleResponse:
    """Get a stripboard grouped into unscheduled and day buckets."""
    try:
        return _schedule(scheduler, board_id)
    except SmartSetError as e:
        raise http_error(e) from e


@router.post("/{board_id}/move", response_model=MoveResponse)
async def move_strip(
    board_id: str,
    request: MoveRequest,
    scheduler: StripboardScheduler = Depends(get_scheduler),
) -> MoveResponse:
    """Move a strip one position up or down, crossing day boundaries."""
    try:
        result = scheduler.move(board_id, request.strip_id, request.direction)
        return MoveResponse(
            moved=result.moved,
            strip_id=result.strip.id,
            order=result.strip.order,
            from_day=result.from_day,
            to_day=result.to_day,
            schedule=_schedule(scheduler, board_id),
        )
    except SmartSetError as e:
        raise http_error(e) from e
    except Exception as e:
        logger.error("Failed to move strip", board_id=board_id, error=str(e))
        raise HTTPException(status_code=500, detail="Failed to move strip") from e


@router.put("/{board_id}/days", response_model=DaysResponse)
async def save_days(
    board_id: str,
    request: DaysRequest,
    scheduler: StripboardScheduler = Depends(get_scheduler),
) -> DaysResponse:
    """Replace the shooting days, remapping scheduled scenes by position."""
    try:
        if request.days is not None:
            days = request.days
        else:
            days = date_range(request.start or "", request.end or "")
        changed = scheduler.save_days(board_id, days)
        schedule = _schedule(scheduler, board_id)
        return DaysResponse(
            days=schedule.days,
            rescheduled_scene_ids=[scene.id for scene in changed],
            schedule=schedule,
        )
    except SmartSetError as e:
        raise http_error(e) from e
    except Exception as e:
        logger.error("Failed to save days", board_id=board_id, error=str(e))
        raise HTTPException(status_code=500, detail="Failed to save days") from e


@router.post("/{board_id}/renormalize", response_model=RenormalizeResponse)
async def renormalize(
    board_id: str,
    scheduler: StripboardScheduler = Depends(get_scheduler),
) -> RenormalizeResponse:
    """Rewrite every bucket's strip orders to consecutive integers."""
    try:
        return RenormalizeResponse(buckets_changed=scheduler.renormalize(board_id))
    except SmartSetError as e:
        raise http_error(e) from e


@router.post("/{board_id}/optimize", response_model=ScheduleResponse)
async def optimize(
    board_id: str,
    store: ProductionStore = Depends(get_store),
    scheduler: StripboardScheduler = Depends(get_scheduler),
    client: LLMClient = Depends(get_llm_client),
) -> ScheduleResponse:
    """Reorder the board with the model's location/set/time-of-day grouping."""
    try:
        await optimize_stripboard(store, client, board_id)
        return _schedule(scheduler, board_id)
    except SmartSetError as e:
        raise http_error(e) from e
    except Exception as e:
        logger.error(
            "Failed to optimize stripboard", board_id=board_id, error=str(e)
        )
        raise HTTPException(
            status_code=500, detail="Failed to optimize stripboard"
        ) from e


@router.delete("/{board_id}")
async def delete_stripboard(
    board_id: str,
    store: ProductionStore = Depends(get_store),
) -> dict[str, bool]:
    """Delete a stripboard."""
    if not store.delete_stripboard(board_id):
        raise HTTPException(status_code=404, detail="Stripboard not found")
    return {"deleted": True}
