"""Step-by-step stripboard creation with a resumable draft."""

from __future__ import annotations

from typing import Any

from smartset.config import get_logger
from smartset.exceptions import ValidationError
from smartset.models import ManualBoardDraft, Scene, Stripboard
from smartset.storage import ProductionStore

logger = get_logger(__name__)

MANUAL_BOARD_NAME = "Manual Board"


def manual_slugline(int_ext: str, set_name: str, day_night: str) -> str:
    return f"{int_ext} {set_name} - {day_night}".strip()


class ManualBoardBuilder:
    """Collects scenes one at a time and turns them into a new board."""

    def __init__(self, store: ProductionStore) -> None:
        self.store = store

    def load(self, project_id: str) -> ManualBoardDraft:
        """Return the saved draft, or an empty one."""
        self.store.require_project(project_id)
        draft = self.store.load_manual_draft(project_id)
        return draft or ManualBoardDraft(project_id=project_id)

    def save_current(
        self, project_id: str, current_scene: dict[str, Any]
    ) -> ManualBoardDraft:
        """Persist the partially filled scene form."""
        draft = self.load(project_id)
        draft.current_scene = current_scene
        self.store.save_manual_draft(draft)
        return draft

    def add_scene(
        self,
        project_id: str,
        scene_number: str,
        int_ext: str = "INT",
        day_night: str = "DAY",
        set_name: str = "",
        location_name: str = "",
        pages: str = "1/8",
        synopsis: str = "",
        element_ids: list[str] | None = None,
    ) -> ManualBoardDraft:
        """Append a completed scene to the draft and reset the form.

        Raises:
            ValidationError: If the scene number is empty
        """
        if not scene_number.strip():
            raise ValidationError(
                message="Scene number is required",
                details={"project_id": project_id},
            )
        draft = self.load(project_id)
        draft.scenes.append(
            Scene(
                project_id=project_id,
                scene_number=scene_number.strip(),
                slugline=manual_slugline(int_ext, set_name, day_night),
                int_ext=int_ext,
                day_night=day_night,
                set_name=set_name,
                location_name=location_name,
                page_count_in_eighths=pages,
                synopsis=synopsis,
                element_ids=element_ids or [],
            )
        )
        draft.current_scene = {}
        self.store.save_manual_draft(draft)
        return draft

    def clear(self, project_id: str) -> bool:
        """Discard the draft."""
        return self.store.clear_manual_draft(project_id)

    def finish(self, project_id: str, name: str = MANUAL_BOARD_NAME) -> Stripboard:
        """Append the drafted scenes to the project and build a board of them.

        Raises:
            ValidationError: If the draft holds no scenes
        """
        draft = self.load(project_id)
        if not draft.scenes:
            raise ValidationError(
                message="The manual board has no scenes",
                hint="Add at least one scene before finishing",
                details={"project_id": project_id},
            )
        existing = self.store.get_project_scenes(project_id)
        self.store.save_scenes(project_id, existing + draft.scenes)
        board = self.store.create_default_stripboard(
            project_id, draft.scenes, name=name
        )
        self.store.clear_manual_draft(project_id)
        logger.info(
            "Finished manual board",
            project_id=project_id,
            board_id=board.id,
            scenes=len(draft.scenes),
        )
        return board
