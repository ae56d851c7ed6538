"""Shooting day ranges and positional day remapping."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, timedelta

from smartset.exceptions import ValidationError
from smartset.models import Scene, validate_iso_day


def date_range(start: str, end: str) -> list[str]:
    """Return every ISO day from ``start`` to ``end`` inclusive.

    Raises:
        ValidationError: If a bound is not a date or ``end`` precedes ``start``
    """
    try:
        first = date.fromisoformat(validate_iso_day(start))
        last = date.fromisoformat(validate_iso_day(end))
    except ValueError as e:
        raise ValidationError(
            message="Invalid day range",
            hint="Use YYYY-MM-DD for both start and end",
            details={"start": start, "end": end},
        ) from e
    if last < first:
        raise ValidationError(
            message="Day range ends before it starts",
            details={"start": start, "end": end},
        )
    return [
        (first + timedelta(days=offset)).isoformat()
        for offset in range((last - first).days + 1)
    ]


def build_day_mapping(
    old_days: Iterable[str], new_days: Iterable[str]
) -> dict[str, str | None]:
    """Pair sorted old days with sorted new days by index.

    Old days past the end of the new list map to None (unscheduled).
    """
    old_sorted = sorted(set(old_days))
    new_sorted = sorted(set(new_days))
    return {
        day: new_sorted[index] if index < len(new_sorted) else None
        for index, day in enumerate(old_sorted)
    }


def remap_scene_days(
    scenes: Iterable[Scene],
    old_days: Iterable[str],
    new_days: Iterable[str],
) -> list[Scene]:
    """Move scheduled scenes from the old day list onto the new one.

    Args:
        scenes: Scenes of the project
        old_days: Current shooting days
        new_days: Replacement shooting days

    Returns:
        Updated copies of only the scenes whose day changed
    """
    mapping = build_day_mapping(old_days, new_days)
    changed: list[Scene] = []
    for scene in scenes:
        if scene.shoot_day is None or scene.shoot_day not in mapping:
            continue
        target = mapping[scene.shoot_day]
        if target != scene.shoot_day:
            changed.append(scene.with_shoot_day(target))
    return changed
