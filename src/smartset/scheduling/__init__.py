"""Stripboard scheduling: day buckets, moves, day ranges and AI ordering."""

from smartset.scheduling.days import build_day_mapping, date_range, remap_scene_days
from smartset.scheduling.grouping import (
    BoardSummary,
    DayBucket,
    ScheduleView,
    candidate_days,
    group_strips,
    summarize,
)
from smartset.scheduling.moves import (
    Direction,
    MoveResult,
    move_strip,
    renormalize_bucket,
)
from smartset.scheduling.scheduler import StripboardScheduler

__all__ = [
    "BoardSummary",
    "DayBucket",
    "Direction",
    "MoveResult",
    "ScheduleView",
    "StripboardScheduler",
    "build_day_mapping",
    "candidate_days",
    "date_range",
    "group_strips",
    "move_strip",
    "remap_scene_days",
    "renormalize_bucket",
    "summarize",
]
