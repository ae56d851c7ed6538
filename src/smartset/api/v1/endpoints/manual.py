"""Manual stripboard creation endpoints."""

from fastapi import APIRouter, Depends

from smartset.api.dependencies import get_store, http_error
from smartset.api.v1.schemas import (
    DraftCurrentRequest,
    FinishManualBoardRequest,
    ManualSceneRequest,
    StripboardSummaryResponse,
)
from smartset.exceptions import SmartSetError
from smartset.models import ManualBoardDraft
from smartset.scheduling.grouping import group_strips, summarize
from smartset.scheduling.manual import ManualBoardBuilder
from smartset.storage import ProductionStore

router = APIRouter()


def _builder(store: ProductionStore = Depends(get_store)) -> ManualBoardBuilder:
    return ManualBoardBuilder(store)


@router.get("/{project_id}/manual-board", response_model=ManualBoardDraft)
async def load_draft(
    project_id: str,
    builder: ManualBoardBuilder = Depends(_builder),
) -> ManualBoardDraft:
    """Load the saved draft, or an empty one."""
    try:
        return builder.load(project_id)
    except SmartSetError as e:
        raise http_error(e) from e


@router.put("/{project_id}/manual-board", response_model=ManualBoardDraft)
async def save_current_scene(
    project_id: str,
    request: DraftCurrentRequest,
    builder: ManualBoardBuilder = Depends(_builder),
) -> ManualBoardDraft:
    """Save the partially filled scene form."""
    try:
        return builder.save_current(project_id, request.current_scene)
    except SmartSetError as e:
        raise http_error(e) from e


@router.post("/{project_id}/manual-board/scenes", response_model=ManualBoardDraft)
async def add_scene(
    project_id: str,
    request: ManualSceneRequest,
    builder: ManualBoardBuilder = Depends(_builder),
) -> ManualBoardDraft:
    """Append a completed scene to the draft."""
    try:
        return builder.add_scene(project_id, **request.model_dump())
    except SmartSetError as e:
        raise http_error(e) from e


@router.delete("/{project_id}/manual-board")
async def clear_draft(
    project_id: str,
    builder: ManualBoardBuilder = Depends(_builder),
) -> dict[str, bool]:
    """Discard the draft."""
    return {"cleared": builder.clear(project_id)}


@router.post(
    "/{project_id}/manual-board/finish",
    response_model=StripboardSummaryResponse,
    status_code=201,
)
async def finish_board(
    project_id: str,
    request: FinishManualBoardRequest,
    store: ProductionStore = Depends(get_store),
    builder: ManualBoardBuilder = Depends(_builder),
) -> StripboardSummaryResponse:
    """Create a stripboard from the drafted scenes."""
    try:
        board = builder.finish(project_id, name=request.name)
        view = group_strips(
            board,
            store.get_project_scenes(project_id),
            store.require_project(project_id).shoot_days,
        )
        return StripboardSummaryResponse.from_summary(summarize(view, board))
    except SmartSetError as e:
        raise http_error(e) from e
