"""Scene endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from smartset.api.dependencies import get_store
from smartset.api.v1.schemas import SceneUpdateRequest
from smartset.config import get_logger
from smartset.models import Scene
from smartset.storage import ProductionStore

logger = get_logger(__name__)
router = APIRouter()


@router.get("/{scene_id}", response_model=Scene)
async def get_scene(
    scene_id: str,
    store: ProductionStore = Depends(get_store),
) -> Scene:
    """Get scene details by ID."""
    scene = store.get_scene(scene_id)
    if scene is None:
        raise HTTPException(status_code=404, detail="Scene not found")
    return scene


@router.patch("/{scene_id}", response_model=Scene)
async def update_scene(
    scene_id: str,
    scene_update: SceneUpdateRequest,
    store: ProductionStore = Depends(get_store),
) -> Scene:
    """Update scene fields; a new page length also updates ``pages``."""
    try:
        scene = store.get_scene(scene_id)
        if scene is None:
            raise HTTPException(status_code=404, detail="Scene not found")

        changes = scene_update.model_dump(exclude_unset=True)
        data = scene.model_dump()
        data.update(changes)
        updated = Scene.model_validate(data)
        store.update_scene(updated)

        logger.info(
            "Updated scene", scene_id=scene_id, fields=sorted(changes.keys())
        )
        return updated

    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        logger.error("Failed to update scene", scene_id=scene_id, error=str(e))
        raise HTTPException(status_code=500, detail="Failed to update scene") from e
