"""Turn an extraction result into project records."""

from __future__ import annotations

from dataclasses import dataclass

from smartset.breakdown.categories import classify
from smartset.config import get_logger
from smartset.models import (
    BreakdownResult,
    ElementCategory,
    ProductionElement,
    Scene,
    ScriptVersion,
    Stripboard,
)
from smartset.storage import ProductionStore

logger = get_logger(__name__)


@dataclass
class ImportResult:
    """Records created by one breakdown import."""

    scenes: list[Scene]
    elements: list[ProductionElement]
    stripboard: Stripboard
    script_version: ScriptVersion


def build_elements(
    project_id: str, result: BreakdownResult
) -> list[ProductionElement]:
    """Create classified elements, one per distinct name.

    Cast members are numbered in order of appearance.
    """
    elements: list[ProductionElement] = []
    seen: set[str] = set()
    cast_index = 0
    for raw in result.elements:
        name = raw.name.strip()
        if not name or name in seen:
            continue
        seen.add(name)
        category = classify(raw.category)
        cast_id = None
        if category is ElementCategory.CAST:
            cast_index += 1
            cast_id = cast_index
        elements.append(
            ProductionElement(
                project_id=project_id,
                name=name,
                category=category,
                raw_category=raw.category or None,
                cast_id=cast_id,
            )
        )
    return elements


def build_scenes(
    project_id: str,
    result: BreakdownResult,
    elements: list[ProductionElement],
) -> list[Scene]:
    """Create scenes, resolving ``sceneElements`` names to element ids."""
    ids_by_name = {element.name: element.id for element in elements}
    scenes: list[Scene] = []
    for raw in result.scenes:
        names = result.scene_elements.get(raw.scene_number, [])
        element_ids = [
            ids_by_name[name.strip()] for name in names if name.strip() in ids_by_name
        ]
        scenes.append(
            Scene(
                project_id=project_id,
                scene_number=raw.scene_number,
                slugline=raw.slugline,
                int_ext=raw.int_ext,
                day_night=raw.day_night,
                set_name=raw.set_name,
                location_name=raw.location_name,
                page_count_in_eighths=raw.page_count_in_eighths or "0 0/8",
                synopsis=raw.synopsis,
                element_ids=list(dict.fromkeys(element_ids)),
            )
        )
    return scenes


def import_breakdown(
    store: ProductionStore,
    project_id: str,
    result: BreakdownResult,
    file_name: str = "script.pdf",
) -> ImportResult:
    """Replace a project's scenes and elements with an extraction result.

    Also creates the default stripboard and records a new script version.

    Raises:
        NotFoundError: If the project does not exist
    """
    store.require_project(project_id)

    elements = build_elements(project_id, result)
    store.save_elements(project_id, elements)

    scenes = build_scenes(project_id, result, elements)
    store.save_scenes(project_id, scenes)
    board = store.create_default_stripboard(project_id, scenes)

    version = ScriptVersion(
        project_id=project_id,
        file_name=file_name,
        version=len(store.get_script_versions(project_id)) + 1,
    )
    store.save_script_version(version)

    logger.info(
        "Imported breakdown",
        project_id=project_id,
        scenes=len(scenes),
        elements=len(elements),
        board_id=board.id,
        version=version.version,
    )
    return ImportResult(
        scenes=scenes,
        elements=elements,
        stripboard=board,
        script_version=version,
    )
