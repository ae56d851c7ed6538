"""Breakdown import endpoint."""

from fastapi import APIRouter, Depends, HTTPException

from smartset.api.dependencies import get_job_runner, get_store, http_error
from smartset.api.v1.schemas import ImportRequest, ImportResponse
from smartset.breakdown.importer import import_breakdown
from smartset.breakdown.jobs import BreakdownJobRunner
from smartset.config import get_logger
from smartset.exceptions import SmartSetError
from smartset.models import JobStatus
from smartset.storage import ProductionStore

logger = get_logger(__name__)
router = APIRouter()


@router.post("/{project_id}/import", response_model=ImportResponse, status_code=201)
async def import_result(
    project_id: str,
    request: ImportRequest,
    store: ProductionStore = Depends(get_store),
    runner: BreakdownJobRunner = Depends(get_job_runner),
) -> ImportResponse:
    """Replace the project's scenes and elements with a breakdown.

    The breakdown is either sent inline or taken from a finished job.
    """
    try:
        result = request.result
        if request.job_id is not None:
            job = runner.status(request.job_id)
            if job.status is not JobStatus.DONE or job.result is None:
                raise HTTPException(
                    status_code=409,
                    detail=f"Job {job.id} is not finished ({job.status.value})",
                )
            result = job.result
        if result is None:
            raise HTTPException(status_code=400, detail="No breakdown to import")

        imported = import_breakdown(store, project_id, result, request.file_name)
        return ImportResponse(
            scene_count=len(imported.scenes),
            element_count=len(imported.elements),
            stripboard_id=imported.stripboard.id,
            script_version=imported.script_version,
        )
    except HTTPException:
        raise
    except SmartSetError as e:
        raise http_error(e) from e
    except Exception as e:
        logger.error(
            "Failed to import breakdown", project_id=project_id, error=str(e)
        )
        raise HTTPException(status_code=500, detail="Failed to import breakdown") from e
