"""Stripboard scheduler: grouping, moves and day changes backed by the store.

Every operation loads the board, its project and scenes, applies one change
and persists it before returning. There is a single writer, so no locking is
done here beyond what the store itself provides.
"""

from __future__ import annotations

from collections.abc import Iterable

from smartset.config import get_logger
from smartset.exceptions import NotFoundError, SchedulingError
from smartset.models import Scene, Stripboard, validate_iso_day
from smartset.scheduling.days import date_range, remap_scene_days
from smartset.scheduling.grouping import (
    BoardSummary,
    ScheduleView,
    group_strips,
    summarize,
)
from smartset.scheduling.moves import (
    Direction,
    MoveResult,
    move_strip,
    renormalize_bucket,
)
from smartset.storage import ProductionStore

logger = get_logger(__name__)


class StripboardScheduler:
    """Applies schedule edits to persisted stripboards."""

    def __init__(self, store: ProductionStore) -> None:
        """Initialize scheduler.

        Args:
            store: Production store holding boards and scenes
        """
        self.store = store

    def _load(self, board_id: str) -> tuple[Stripboard, ScheduleView]:
        board = self.store.require_stripboard(board_id)
        project = self.store.get_project(board.project_id)
        scenes = self.store.get_project_scenes(board.project_id)
        view = group_strips(
            board, scenes, project.shoot_days if project is not None else ()
        )
        return board, view

    def view(self, board_id: str) -> tuple[Stripboard, ScheduleView]:
        """Return a board and its current day-bucket projection."""
        return self._load(board_id)

    def move(
        self, board_id: str, strip_id: str, direction: Direction | str
    ) -> MoveResult:
        """Move a strip one position up or down.

        Raises:
            NotFoundError: If the board or the strip does not exist
        """
        direction = Direction(direction)
        board, view = self._load(board_id)
        strip = board.find_strip(strip_id)
        if strip is None:
            raise NotFoundError("strip", strip_id)

        result = move_strip(view, strip_id, direction)
        if result is None:
            # Day breaks and strips without a scene are not on the schedule
            logger.debug(
                "Strip not on schedule", board_id=board_id, strip_id=strip_id
            )
            return MoveResult(moved=False, strip=strip)
        if not result.moved:
            return result

        if result.scene is not None:
            self.store.update_scene(result.scene)
        self.store.save_stripboard(board)
        logger.info(
            "Moved strip",
            board_id=board_id,
            strip_id=strip_id,
            direction=direction.value,
            from_day=result.from_day,
            to_day=result.to_day,
        )
        return result

    def save_days(self, board_id: str, new_days: Iterable[str]) -> list[Scene]:
        """Replace the board's shooting days, remapping scheduled scenes.

        Scenes on the i-th current day move to the i-th new day; scenes on
        days past the end of the new list become unscheduled.

        Returns:
            Scenes whose shooting day changed
        """
        try:
            days = sorted({validate_iso_day(day) for day in new_days})
        except ValueError as e:
            raise SchedulingError(
                message="Invalid shooting day",
                hint="Use YYYY-MM-DD dates",
                details={"error": str(e)},
            ) from e

        board, view = self._load(board_id)
        changed = remap_scene_days(view.scenes.values(), view.days, days)
        for scene in changed:
            self.store.update_scene(scene)

        board.shooting_days = days
        self.store.save_stripboard(board)

        project = self.store.get_project(board.project_id)
        if project is not None and project.shoot_days:
            project.shoot_days = days
            self.store.save_project(project)

        logger.info(
            "Saved shooting days",
            board_id=board_id,
            old_days=len(view.days),
            new_days=len(days),
            rescheduled=len(changed),
        )
        return changed

    def save_day_range(self, board_id: str, start: str, end: str) -> list[Scene]:
        """Replace the board's shooting days with an inclusive date range."""
        return self.save_days(board_id, date_range(start, end))

    def renormalize(self, board_id: str) -> int:
        """Rewrite every bucket's orders to consecutive integers.

        Returns:
            Number of buckets whose orders changed
        """
        board, view = self._load(board_id)
        changed = sum(1 for bucket in view.buckets if renormalize_bucket(bucket))
        if changed:
            self.store.save_stripboard(board)
            logger.info(
                "Renormalized strip orders", board_id=board_id, buckets=changed
            )
        return changed

    def summaries(self, project_id: str) -> list[BoardSummary]:
        """Summarize every stripboard of a project."""
        project = self.store.get_project(project_id)
        scenes = self.store.get_project_scenes(project_id)
        shoot_days = project.shoot_days if project is not None else []
        return [
            summarize(group_strips(board, scenes, shoot_days), board)
            for board in self.store.get_stripboards(project_id)
        ]
