"""Day-bucket projection of a stripboard.

A stripboard is shown as a sequence of buckets: the unscheduled scenes first,
then one bucket per shooting day in ascending date order. The projection is
derived from the board, the project and the scenes every time it is needed and
is never stored.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from smartset.models import Scene, Strip, Stripboard
from smartset.utils.eighths import format_eighths


@dataclass
class DayBucket:
    """Strips scheduled on one day (``day`` is None for unscheduled)."""

    day: str | None
    strips: list[Strip] = field(default_factory=list)

    @property
    def is_unscheduled(self) -> bool:
        return self.day is None

    def orders(self) -> list[float]:
        return [strip.order for strip in self.strips]

    def has_ties(self) -> bool:
        """Whether two strips in this bucket share an order value."""
        orders = self.orders()
        return len(set(orders)) != len(orders)


@dataclass
class ScheduleView:
    """Read-only grouping of a board's strips into day buckets."""

    buckets: list[DayBucket]
    scenes: dict[str, Scene]

    @property
    def days(self) -> list[str]:
        """Candidate shooting days in ascending order."""
        return [b.day for b in self.buckets if b.day is not None]

    @property
    def unscheduled(self) -> DayBucket:
        return self.buckets[0]

    def flattened(self) -> list[Strip]:
        """All visible strips: unscheduled first, then day by day."""
        return [strip for bucket in self.buckets for strip in bucket.strips]

    def locate(self, strip_id: str) -> tuple[int, int] | None:
        """Return ``(bucket_index, position)`` of a strip, or None if hidden."""
        for bucket_index, bucket in enumerate(self.buckets):
            for position, strip in enumerate(bucket.strips):
                if strip.id == strip_id:
                    return bucket_index, position
        return None

    def scene_for(self, strip: Strip) -> Scene:
        return self.scenes[strip.scene_id]


def candidate_days(
    board: Stripboard,
    scenes: Iterable[Scene],
    project_shoot_days: Iterable[str] = (),
) -> list[str]:
    """Union of explicit board days, project days and scheduled scene days."""
    days = set(board.shooting_days)
    days.update(project_shoot_days)
    days.update(scene.shoot_day for scene in scenes if scene.shoot_day)
    return sorted(days)


def group_strips(
    board: Stripboard,
    scenes: Iterable[Scene],
    project_shoot_days: Iterable[str] = (),
) -> ScheduleView:
    """Partition a board's strips into the unscheduled bucket and day buckets.

    Strips whose scene is unknown and day-break markers are left out. Each
    bucket is sorted by ascending ``order``; equal orders keep board order.

    Args:
        board: Stripboard to project
        scenes: Scenes of the board's project
        project_shoot_days: Days declared on the project

    Returns:
        Schedule view with the unscheduled bucket at index 0
    """
    scene_map = {scene.id: scene for scene in scenes}
    days = candidate_days(board, scene_map.values(), project_shoot_days)

    buckets: dict[str | None, DayBucket] = {None: DayBucket(day=None)}
    for day in days:
        buckets[day] = DayBucket(day=day)

    for strip in board.strips:
        if strip.is_day_break:
            continue
        scene = scene_map.get(strip.scene_id)
        if scene is None:
            continue
        buckets[scene.shoot_day].strips.append(strip)

    for bucket in buckets.values():
        bucket.strips.sort(key=lambda s: s.order)

    return ScheduleView(buckets=list(buckets.values()), scenes=scene_map)


@dataclass
class BoardSummary:
    """Headline figures shown in a stripboard listing."""

    board_id: str
    name: str
    scene_count: int
    day_count: int
    total_pages: float

    @property
    def total_eighths(self) -> str:
        return format_eighths(self.total_pages)


def summarize(view: ScheduleView, board: Stripboard) -> BoardSummary:
    """Count visible scenes, shooting days and pages of a board."""
    strips = view.flattened()
    return BoardSummary(
        board_id=board.id,
        name=board.name,
        scene_count=len(strips),
        day_count=len(view.days),
        total_pages=sum(view.scene_for(s).pages for s in strips),
    )
