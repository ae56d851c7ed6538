"""Production store: typed access to projects, scenes, boards and events.

``ProductionStore`` is the persistence surface the scheduler, the importer and
the API work against. Each method loads or writes the individual records it
needs through :class:`RecordStore`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from smartset.breakdown.categories import classify
from smartset.config import get_logger
from smartset.exceptions import NotFoundError
from smartset.models import (
    CalendarEvent,
    ManualBoardDraft,
    ProductionElement,
    ProductionType,
    Project,
    Scene,
    ScriptVersion,
    Strip,
    Stripboard,
    utc_now_iso,
)
from smartset.storage.connection import DatabaseConnection
from smartset.storage.records import RecordStore

logger = get_logger(__name__)

PROJECT = "project"
SCENE = "scene"
ELEMENT = "element"
STRIPBOARD = "stripboard"
SCRIPT_VERSION = "script_version"
EVENT = "event"
DRAFT = "manual_draft"

DEFAULT_BOARD_NAME = "Main Board"


def _dump(model: Any) -> dict[str, Any]:
    return model.model_dump(mode="json")


class ProductionStore:
    """Persistence facade over the SQLite record store."""

    def __init__(self, db_path: str | Path, timeout: float = 30.0) -> None:
        """Open the store.

        Args:
            db_path: SQLite file, or ``":memory:"``
            timeout: Seconds to wait on a locked database
        """
        self.connection = DatabaseConnection(db_path, timeout=timeout)
        self.records = RecordStore(self.connection)
        self.records.initialize()

    @classmethod
    def from_settings(cls, settings: Any) -> ProductionStore:
        """Create a store from application settings."""
        return cls(settings.database_path, timeout=settings.database_timeout)

    def close(self) -> None:
        """Close the underlying connection."""
        self.connection.close()

    # Projects

    def get_projects(self) -> list[Project]:
        """Return every project."""
        return [Project.model_validate(d) for d in self.records.list(PROJECT)]

    def get_project(self, project_id: str) -> Project | None:
        """Return a project or None."""
        data = self.records.get(PROJECT, project_id)
        return Project.model_validate(data) if data else None

    def require_project(self, project_id: str) -> Project:
        """Return a project or raise NotFoundError."""
        project = self.get_project(project_id)
        if project is None:
            raise NotFoundError("project", project_id)
        return project

    def create_project(
        self,
        name: str,
        type: ProductionType | str = ProductionType.FEATURE,
        shoot_days: list[str] | None = None,
    ) -> Project:
        """Create and persist a new project."""
        project = Project(
            name=name,
            type=ProductionType(type),
            shoot_days=shoot_days or [],
        )
        self.save_project(project)
        logger.info("Created project", project_id=project.id, name=name)
        return project

    def save_project(self, project: Project) -> None:
        """Insert or update a project."""
        self.records.put(PROJECT, project.id, _dump(project))

    # Scenes

    def get_project_scenes(self, project_id: str) -> list[Scene]:
        """Return the scenes of a project in script order."""
        return [
            Scene.model_validate(d) for d in self.records.list(SCENE, project_id)
        ]

    def get_scene(self, scene_id: str) -> Scene | None:
        """Return a scene or None."""
        data = self.records.get(SCENE, scene_id)
        return Scene.model_validate(data) if data else None

    def save_scenes(self, project_id: str, scenes: list[Scene]) -> None:
        """Replace the scene list of a project and recompute its totals."""
        self.records.replace_project(
            SCENE, project_id, [(scene.id, _dump(scene)) for scene in scenes]
        )
        self._update_totals(project_id, scenes)

    def update_scene(self, scene: Scene) -> None:
        """Persist one edited scene."""
        previous = self.get_scene(scene.id)
        self.records.put(SCENE, scene.id, _dump(scene), project_id=scene.project_id)
        if previous is None or previous.pages != scene.pages:
            self._update_totals(
                scene.project_id, self.get_project_scenes(scene.project_id)
            )

    def _update_totals(self, project_id: str, scenes: list[Scene]) -> None:
        project = self.get_project(project_id)
        if project is None:
            return
        project.total_scenes = len(scenes)
        project.total_pages = sum(scene.pages for scene in scenes)
        self.save_project(project)

    # Elements

    def get_elements(self, project_id: str) -> list[ProductionElement]:
        """Return the production elements of a project."""
        return [
            ProductionElement.model_validate(d)
            for d in self.records.list(ELEMENT, project_id)
        ]

    def save_elements(
        self, project_id: str, elements: list[ProductionElement]
    ) -> None:
        """Replace the element list of a project."""
        self.records.replace_project(
            ELEMENT, project_id, [(el.id, _dump(el)) for el in elements]
        )

    def add_element(
        self, project_id: str, name: str, raw_category: str | None = None
    ) -> ProductionElement:
        """Create one element, classifying its free-text category."""
        element = ProductionElement(
            project_id=project_id,
            name=name,
            category=classify(raw_category),
            raw_category=raw_category,
        )
        self.records.put(ELEMENT, element.id, _dump(element), project_id=project_id)
        return element

    def delete_element(self, element_id: str) -> bool:
        """Delete one element."""
        return self.records.delete(ELEMENT, element_id)

    # Stripboards

    def get_stripboards(self, project_id: str) -> list[Stripboard]:
        """Return the stripboards of a project."""
        return [
            Stripboard.model_validate(d)
            for d in self.records.list(STRIPBOARD, project_id)
        ]

    def get_stripboard(self, board_id: str) -> Stripboard | None:
        """Return a stripboard or None."""
        data = self.records.get(STRIPBOARD, board_id)
        return Stripboard.model_validate(data) if data else None

    def require_stripboard(self, board_id: str) -> Stripboard:
        """Return a stripboard or raise NotFoundError."""
        board = self.get_stripboard(board_id)
        if board is None:
            raise NotFoundError("stripboard", board_id)
        return board

    def save_stripboard(self, board: Stripboard) -> None:
        """Insert or update a stripboard."""
        self.records.put(
            STRIPBOARD, board.id, _dump(board), project_id=board.project_id
        )

    def delete_stripboard(self, board_id: str) -> bool:
        """Delete a stripboard."""
        deleted = self.records.delete(STRIPBOARD, board_id)
        if deleted:
            logger.info("Deleted stripboard", board_id=board_id)
        return deleted

    def create_default_stripboard(
        self,
        project_id: str,
        scenes: list[Scene],
        name: str = DEFAULT_BOARD_NAME,
    ) -> Stripboard:
        """Create a board with one strip per scene in the given order."""
        board = Stripboard(
            project_id=project_id,
            name=name,
            strips=[
                Strip(scene_id=scene.id, order=index)
                for index, scene in enumerate(scenes)
            ],
        )
        self.save_stripboard(board)
        logger.info(
            "Created stripboard",
            board_id=board.id,
            project_id=project_id,
            strips=len(board.strips),
        )
        return board

    # Script versions

    def get_script_versions(self, project_id: str) -> list[ScriptVersion]:
        """Return the imported script versions of a project."""
        return [
            ScriptVersion.model_validate(d)
            for d in self.records.list(SCRIPT_VERSION, project_id)
        ]

    def save_script_version(self, version: ScriptVersion) -> None:
        """Store a script version and make it the project's current script."""
        self.records.put(
            SCRIPT_VERSION, version.id, _dump(version), project_id=version.project_id
        )
        project = self.get_project(version.project_id)
        if project is not None:
            project.current_script_id = version.id
            self.save_project(project)

    # Calendar events

    def get_events(self, project_id: str) -> list[CalendarEvent]:
        """Return the calendar events of a project sorted by date."""
        events = [
            CalendarEvent.model_validate(d)
            for d in self.records.list(EVENT, project_id)
        ]
        return sorted(events, key=lambda e: (e.date, e.time or ""))

    def get_event(self, event_id: str) -> CalendarEvent | None:
        """Return an event or None."""
        data = self.records.get(EVENT, event_id)
        return CalendarEvent.model_validate(data) if data else None

    def save_event(self, event: CalendarEvent) -> None:
        """Insert or update an event."""
        self.records.put(EVENT, event.id, _dump(event), project_id=event.project_id)

    def delete_event(self, event_id: str) -> bool:
        """Delete an event."""
        return self.records.delete(EVENT, event_id)

    # Manual board draft

    def load_manual_draft(self, project_id: str) -> ManualBoardDraft | None:
        """Return the saved manual board draft of a project."""
        data = self.records.get(DRAFT, project_id)
        return ManualBoardDraft.model_validate(data) if data else None

    def save_manual_draft(self, draft: ManualBoardDraft) -> None:
        """Persist a manual board draft, one per project."""
        draft.updated_at = utc_now_iso()
        self.records.put(
            DRAFT, draft.project_id, _dump(draft), project_id=draft.project_id
        )

    def clear_manual_draft(self, project_id: str) -> bool:
        """Discard the manual board draft of a project."""
        return self.records.delete(DRAFT, project_id)
