"""AI reordering of a stripboard by location, set and time of day."""

from __future__ import annotations

import json

from smartset.breakdown.prompts import OPTIMIZE_SCHEMA, OPTIMIZE_SYSTEM
from smartset.config import get_logger
from smartset.exceptions import LLMResponseError
from smartset.llm import GenerationRequest, LLMClient
from smartset.models import Scene, Strip, Stripboard
from smartset.storage import ProductionStore

logger = get_logger(__name__)


def apply_scene_order(
    board: Stripboard, scenes: list[Scene], ordered_scene_ids: list[str]
) -> Stripboard:
    """Rewrite strip orders to follow a list of scene ids.

    Existing strips are reused so their ids survive. Ids that name no scene
    of the project are ignored; scenes the list leaves out follow in project
    order. Strips that are not tied to a known scene keep their relative
    order at the end.
    """
    scene_ids = [scene.id for scene in scenes]
    known = set(scene_ids)

    strips_by_scene: dict[str, Strip] = {}
    leftovers: list[Strip] = []
    for strip in sorted(board.strips, key=lambda s: s.order):
        if (
            strip.is_day_break
            or strip.scene_id not in known
            or strip.scene_id in strips_by_scene
        ):
            leftovers.append(strip)
        else:
            strips_by_scene[strip.scene_id] = strip

    sequence = [sid for sid in dict.fromkeys(ordered_scene_ids) if sid in known]
    placed = set(sequence)
    sequence.extend(sid for sid in scene_ids if sid not in placed)

    strips: list[Strip] = []
    for scene_id in sequence:
        strip = strips_by_scene.get(scene_id) or Strip(scene_id=scene_id)
        strips.append(strip)
    strips.extend(leftovers)

    for index, strip in enumerate(strips):
        strip.order = index
    board.strips = strips
    return board


def _scene_payload(scenes: list[Scene]) -> str:
    return json.dumps(
        [
            {
                "id": scene.id,
                "sceneNumber": scene.scene_number,
                "locationName": scene.location_name,
                "setName": scene.set_name,
                "dayNight": scene.day_night.value if scene.day_night else "",
                "intExt": scene.int_ext.value if scene.int_ext else "",
            }
            for scene in scenes
        ]
    )


async def request_scene_order(client: LLMClient, scenes: list[Scene]) -> list[str]:
    """Ask the model for an optimized scene order.

    Raises:
        LLMResponseError: If ``orderedSceneIds`` is missing or not a list
    """
    data, response = await client.generate_json(
        GenerationRequest(
            prompt=f"Optimize these scenes: {_scene_payload(scenes)}",
            system=OPTIMIZE_SYSTEM,
            response_schema=OPTIMIZE_SCHEMA,
        )
    )
    ordered = data.get("orderedSceneIds")
    if not isinstance(ordered, list):
        raise LLMResponseError(
            message="Model answer lacks 'orderedSceneIds'",
            raw_preview=response.text[: client.preview_chars],
            model=response.model,
        )
    return [str(scene_id) for scene_id in ordered]


async def optimize_stripboard(
    store: ProductionStore, client: LLMClient, board_id: str
) -> Stripboard:
    """Reorder a stripboard with the model's suggestion and persist it."""
    board = store.require_stripboard(board_id)
    scenes = store.get_project_scenes(board.project_id)
    ordered = await request_scene_order(client, scenes)
    apply_scene_order(board, scenes, ordered)
    store.save_stripboard(board)
    logger.info(
        "Optimized stripboard",
        board_id=board_id,
        suggested=len(ordered),
        strips=len(board.strips),
    )
    return board
