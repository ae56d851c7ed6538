"""Calendar events generated from a planned shooting period."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from smartset.config import get_logger
from smartset.models import CalendarEvent, EventType
from smartset.scheduling.days import date_range
from smartset.storage import ProductionStore

logger = get_logger(__name__)

SHOOTING_CALL_TIME = "08:00"
_SCENE_SEPARATORS = re.compile(r"[\s,]+")


def parse_scene_list(text: str) -> list[str]:
    """Split ``"1, 4A 5"`` into scene numbers."""
    return [item for item in _SCENE_SEPARATORS.split(text.strip()) if item]


@dataclass
class PlannedDay:
    """Scene numbers planned on one date."""

    date: str
    scenes: list[str] = field(default_factory=list)

    @classmethod
    def from_text(cls, date: str, scenes: str) -> PlannedDay:
        return cls(date=date, scenes=parse_scene_list(scenes))


def empty_plan(start: str, end: str) -> list[PlannedDay]:
    """One empty planned day per date of an inclusive range."""
    return [PlannedDay(date=day) for day in date_range(start, end)]


def shooting_title(scenes: list[str]) -> str:
    return f"Shooting - Scenes {', '.join(scenes)}"


def generate_shooting_events(
    store: ProductionStore, project_id: str, plan: Iterable[PlannedDay]
) -> list[CalendarEvent]:
    """Create one shooting event per planned day that has scenes.

    Raises:
        NotFoundError: If the project does not exist
    """
    store.require_project(project_id)
    events: list[CalendarEvent] = []
    for day in plan:
        if not day.scenes:
            continue
        event = CalendarEvent(
            project_id=project_id,
            date=day.date,
            title=shooting_title(day.scenes),
            type=EventType.SHOOTING,
            scenes=day.scenes,
            time=SHOOTING_CALL_TIME,
        )
        store.save_event(event)
        events.append(event)
    logger.info(
        "Generated shooting events", project_id=project_id, events=len(events)
    )
    return events
