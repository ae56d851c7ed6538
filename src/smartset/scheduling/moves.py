"""Up/down strip moves across the day-bucket projection."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from smartset.config import get_logger
from smartset.models import Scene, Strip
from smartset.scheduling.grouping import DayBucket, ScheduleView

logger = get_logger(__name__)

EMPTY_BUCKET_ORDER = 0


class Direction(str, Enum):
    """Direction of a strip move in the flattened schedule."""

    UP = "up"
    DOWN = "down"


@dataclass
class MoveResult:
    """Outcome of a move.

    ``scene`` is set only when the move changed the scene's shooting day and
    therefore has to be persisted alongside the board.
    """

    moved: bool
    strip: Strip
    from_day: str | None = None
    to_day: str | None = None
    scene: Scene | None = None

    @property
    def crossed_bucket(self) -> bool:
        return self.scene is not None


def renormalize_bucket(bucket: DayBucket) -> bool:
    """Rewrite a bucket's orders to 0..n-1 keeping the current sequence.

    Returns:
        True if any order value changed
    """
    changed = False
    for index, strip in enumerate(bucket.strips):
        if strip.order != index:
            strip.order = index
            changed = True
    return changed


def move_strip(
    view: ScheduleView, strip_id: str, direction: Direction
) -> MoveResult | None:
    """Move one strip up or down in a schedule view.

    Strips are mutated in place (they are the board's own strip objects); a
    cross-bucket move also returns the rescheduled scene.

    Args:
        view: Current projection of the board
        strip_id: Strip to move
        direction: Up or down

    Returns:
        Move result, or None if the strip is not part of the view
    """
    location = view.locate(strip_id)
    if location is None:
        return None
    bucket_index, position = location
    bucket = view.buckets[bucket_index]
    strip = bucket.strips[position]
    step = -1 if direction is Direction.UP else 1

    neighbour_position = position + step
    if 0 <= neighbour_position < len(bucket.strips):
        neighbour = bucket.strips[neighbour_position]
        if bucket.has_ties():
            renormalize_bucket(bucket)
        strip.order, neighbour.order = neighbour.order, strip.order
        bucket.strips[position], bucket.strips[neighbour_position] = (
            neighbour,
            strip,
        )
        return MoveResult(
            moved=True, strip=strip, from_day=bucket.day, to_day=bucket.day
        )

    target_index = bucket_index + step
    if not 0 <= target_index < len(view.buckets):
        logger.debug(
            "Move at schedule boundary ignored",
            strip_id=strip_id,
            direction=direction.value,
        )
        return MoveResult(
            moved=False, strip=strip, from_day=bucket.day, to_day=bucket.day
        )

    target = view.buckets[target_index]
    if target.has_ties():
        renormalize_bucket(target)
    orders = target.orders()
    if not orders:
        strip.order = EMPTY_BUCKET_ORDER
    elif direction is Direction.UP:
        strip.order = max(orders) + 1
    else:
        strip.order = min(orders) - 1

    scene = view.scene_for(strip).with_shoot_day(target.day)
    view.scenes[scene.id] = scene
    bucket.strips.pop(position)
    if direction is Direction.UP:
        target.strips.append(strip)
    else:
        target.strips.insert(0, strip)

    return MoveResult(
        moved=True,
        strip=strip,
        from_day=bucket.day,
        to_day=target.day,
        scene=scene,
    )
