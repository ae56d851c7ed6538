"""Smart Set data models.

This module defines the records persisted by the production store: projects,
scenes, production elements, stripboards and their strips, calendar events and
script versions, plus the shapes exchanged with the AI breakdown service.
"""

from __future__ import annotations

import re
from datetime import UTC, date, datetime
from enum import Enum
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from smartset.utils.eighths import format_eighths, parse_eighths


def new_id() -> str:
    """Return a fresh opaque identifier."""
    return str(uuid4())


def utc_now_iso() -> str:
    """Return the current UTC time as an ISO 8601 string."""
    return datetime.now(UTC).isoformat()


ISO_DAY_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


def validate_iso_day(value: str) -> str:
    """Check that a shoot day is a ``YYYY-MM-DD`` calendar date."""
    if not isinstance(value, str) or not ISO_DAY_PATTERN.fullmatch(value):
        raise ValueError(f"Expected a YYYY-MM-DD date, got {value!r}")
    try:
        date.fromisoformat(value)
    except ValueError as e:
        raise ValueError(f"Expected a YYYY-MM-DD date, got {value!r}") from e
    return value


class ProductionType(str, Enum):
    """Kinds of production a project can be."""

    FEATURE = "feature"
    MEDIUM_LENGTH = "medium_length"
    SHORT = "short"
    SERIES = "series"
    COMMERCIAL = "commercial"


class IntExt(str, Enum):
    """Interior/exterior flag of a scene heading."""

    INT = "INT"
    EXT = "EXT"
    INT_EXT = "INT/EXT"

    @classmethod
    def parse(cls, raw: Any) -> IntExt | None:
        """Map the many spellings found in scripts and AI output to a flag."""
        if raw is None or isinstance(raw, cls):
            return raw
        text = str(raw).strip().upper().replace(".", "").replace(" ", "")
        if not text:
            return None
        if text in {"INT/EXT", "INT/EST", "I/E", "EXT/INT", "EST/INT", "IE"}:
            return cls.INT_EXT
        if text.startswith("INT"):
            return cls.INT
        if text.startswith(("EXT", "EST")):
            return cls.EXT
        return None


class DayNight(str, Enum):
    """Time of day a scene takes place."""

    DAY = "DAY"
    NIGHT = "NIGHT"
    DAWN = "DAWN"
    DUSK = "DUSK"

    @classmethod
    def parse(cls, raw: Any) -> DayNight | None:
        """Map English and Italian spellings to a time of day."""
        if raw is None or isinstance(raw, cls):
            return raw
        text = str(raw).strip().upper()
        aliases = {
            "DAY": cls.DAY,
            "D": cls.DAY,
            "GIORNO": cls.DAY,
            "MORNING": cls.DAY,
            "AFTERNOON": cls.DAY,
            "NIGHT": cls.NIGHT,
            "N": cls.NIGHT,
            "NOTTE": cls.NIGHT,
            "EVENING": cls.NIGHT,
            "SERA": cls.NIGHT,
            "DAWN": cls.DAWN,
            "ALBA": cls.DAWN,
            "SUNRISE": cls.DAWN,
            "DUSK": cls.DUSK,
            "TRAMONTO": cls.DUSK,
            "SUNSET": cls.DUSK,
        }
        return aliases.get(text)


class ElementCategory(str, Enum):
    """Closed set of production element categories."""

    CAST = "Cast"
    BACKGROUND = "Background"
    VEHICLES = "Vehicles"
    PROPS = "Props"
    SET_DRESSING = "Set Dressing"
    WARDROBE = "Wardrobe"
    MAKEUP = "Makeup/Hair"
    SFX = "SFX"
    VFX = "VFX"
    ANIMALS = "Animals"
    GREENERY = "Greenery"
    SECURITY = "Security"
    MUSIC = "Music"
    SOUND = "Sound"
    CAMERA = "Camera"
    STUNT = "Stunt"
    OTHER = "Other"


class EventType(str, Enum):
    """Calendar event kinds."""

    SHOOTING = "shooting"
    GENERAL = "general"


class JobStatus(str, Enum):
    """Lifecycle of a breakdown analysis job."""

    QUEUED = "queued"
    RUNNING = "running"
    PARSING = "parsing"
    DONE = "done"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        """Whether polling should stop."""
        return self in {JobStatus.DONE, JobStatus.ERROR}


class Project(BaseModel):
    """A production: the container every other record belongs to."""

    id: str = Field(default_factory=new_id)
    name: str
    code: str = ""
    type: ProductionType = ProductionType.FEATURE
    start_date: str = Field(default_factory=utc_now_iso)
    end_date: str | None = None
    total_pages: float = 0.0
    total_scenes: int = 0
    current_script_id: str | None = None
    shoot_days: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def default_code(self) -> Project:
        """Derive the short project code from the name when not given."""
        if not self.code:
            self.code = self.name[:3].upper()
        return self

    @field_validator("shoot_days")
    @classmethod
    def check_shoot_days(cls, v: list[str]) -> list[str]:
        """Validate every listed shoot day."""
        return [validate_iso_day(day) for day in v]


class Scene(BaseModel):
    """One screenplay scene as broken down for production.

    ``pages`` is always derived from ``page_count_in_eighths`` when the latter
    is present, and the eighths string is derived from ``pages`` otherwise, so
    the two representations never disagree.
    """

    id: str = Field(default_factory=new_id)
    project_id: str
    scene_number: str
    slugline: str = ""
    int_ext: IntExt | None = None
    day_night: DayNight | None = None
    set_name: str = ""
    location_name: str = ""
    page_count_in_eighths: str = "0 0/8"
    pages: float = 0.0
    synopsis: str = ""
    script_text: str | None = None
    element_ids: list[str] = Field(default_factory=list)
    shoot_day: str | None = None

    @model_validator(mode="before")
    @classmethod
    def sync_page_length(cls, data: Any) -> Any:
        """Keep pages and the eighths string consistent."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        eighths = data.get("page_count_in_eighths")
        if eighths:
            data["pages"] = parse_eighths(str(eighths))
        elif data.get("pages") is not None:
            data["page_count_in_eighths"] = format_eighths(float(data["pages"]))
            data["pages"] = parse_eighths(data["page_count_in_eighths"])
        return data

    @field_validator("int_ext", mode="before")
    @classmethod
    def normalize_int_ext(cls, v: Any) -> IntExt | None:
        return IntExt.parse(v)

    @field_validator("day_night", mode="before")
    @classmethod
    def normalize_day_night(cls, v: Any) -> DayNight | None:
        return DayNight.parse(v)

    @field_validator("shoot_day", mode="before")
    @classmethod
    def normalize_shoot_day(cls, v: Any) -> str | None:
        """Treat empty strings as unscheduled and validate the date format."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return validate_iso_day(str(v).strip())

    def with_page_length(self, eighths: str) -> Scene:
        """Return a copy with a new page length, recomputing ``pages``."""
        return self.model_copy(
            update={"page_count_in_eighths": eighths, "pages": parse_eighths(eighths)}
        )

    def with_shoot_day(self, shoot_day: str | None) -> Scene:
        """Return a copy scheduled on ``shoot_day`` (None unschedules)."""
        return self.model_copy(update={"shoot_day": shoot_day})


class ProductionElement(BaseModel):
    """A cast member, prop or any other tagged production resource."""

    id: str = Field(default_factory=new_id)
    project_id: str
    name: str
    category: ElementCategory = ElementCategory.OTHER
    raw_category: str | None = None
    cast_id: int | None = None


class Strip(BaseModel):
    """A positioned reference to one scene within a stripboard."""

    id: str = Field(default_factory=new_id)
    scene_id: str
    order: float = 0
    is_banner: bool = False
    banner_text: str | None = None
    is_day_break: bool = False
    day_number: int | None = None


class Stripboard(BaseModel):
    """An ordered collection of strips: one shooting schedule of a project."""

    id: str = Field(default_factory=new_id)
    project_id: str
    name: str = "Main Board"
    strips: list[Strip] = Field(default_factory=list)
    shooting_days: list[str] = Field(default_factory=list)

    @field_validator("shooting_days")
    @classmethod
    def check_shooting_days(cls, v: list[str]) -> list[str]:
        """Validate every explicit shooting day."""
        return [validate_iso_day(day) for day in v]

    def find_strip(self, strip_id: str) -> Strip | None:
        """Return the strip with the given id, if present."""
        for strip in self.strips:
            if strip.id == strip_id:
                return strip
        return None


class ScriptVersion(BaseModel):
    """An imported screenplay file."""

    id: str = Field(default_factory=new_id)
    project_id: str
    file_name: str
    file_url: str = "#local"
    version: int = 1
    created_at: str = Field(default_factory=utc_now_iso)


class CalendarEvent(BaseModel):
    """A dated entry on the production calendar."""

    id: str = Field(default_factory=new_id)
    project_id: str
    date: str
    title: str
    type: EventType = EventType.GENERAL
    scenes: list[str] = Field(default_factory=list)
    notes: str | None = None
    time: str | None = None

    @field_validator("date")
    @classmethod
    def check_date(cls, v: str) -> str:
        return validate_iso_day(v)


class ManualBoardDraft(BaseModel):
    """Work in progress of the step-by-step stripboard form."""

    project_id: str
    scenes: list[Scene] = Field(default_factory=list)
    current_scene: dict[str, Any] = Field(default_factory=dict)
    updated_at: str = Field(default_factory=utc_now_iso)


# AI breakdown exchange shapes. Field aliases follow the camelCase JSON the
# model is instructed to return.


class BreakdownScene(BaseModel):
    """Scene as returned by the extraction model."""

    model_config = ConfigDict(populate_by_name=True)

    scene_number: str = Field(alias="sceneNumber")
    slugline: str = ""
    int_ext: str = Field(default="", alias="intExt")
    day_night: str = Field(default="", alias="dayNight")
    set_name: str = Field(default="", alias="setName")
    location_name: str = Field(default="", alias="locationName")
    page_count_in_eighths: str = Field(default="", alias="pageCountInEighths")
    synopsis: str = ""

    @field_validator("scene_number", mode="before")
    @classmethod
    def coerce_scene_number(cls, v: Any) -> str:
        """Models sometimes return scene numbers as integers."""
        return str(v).strip()


class BreakdownElement(BaseModel):
    """Element as returned by the extraction model."""

    name: str
    category: str = ""


class BreakdownResult(BaseModel):
    """Complete extraction result for one screenplay."""

    model_config = ConfigDict(populate_by_name=True)

    scenes: list[BreakdownScene] = Field(default_factory=list)
    elements: list[BreakdownElement] = Field(default_factory=list)
    scene_elements: dict[str, list[str]] = Field(
        default_factory=dict, alias="sceneElements"
    )


class BreakdownSummary(BaseModel):
    """Headline counts shown once an extraction finishes."""

    scene_count: int = 0
    location_count: int = 0
    cast_count: int = 0
    props_count: int = 0


class AnalysisJob(BaseModel):
    """State of one asynchronous breakdown analysis."""

    id: str = Field(default_factory=new_id)
    status: JobStatus = JobStatus.QUEUED
    step: str = ""
    model_id: str | None = None
    input_bytes: int | None = None
    raw_preview: str | None = None
    error: str | None = None
    result_summary: BreakdownSummary | None = None
    result: BreakdownResult | None = None
    created_at: float = 0.0
    updated_at: float = 0.0


__all__ = [
    "AnalysisJob",
    "BreakdownElement",
    "BreakdownResult",
    "BreakdownScene",
    "BreakdownSummary",
    "CalendarEvent",
    "DayNight",
    "ElementCategory",
    "EventType",
    "IntExt",
    "JobStatus",
    "ManualBoardDraft",
    "ProductionElement",
    "ProductionType",
    "Project",
    "Scene",
    "ScriptVersion",
    "Strip",
    "Stripboard",
    "new_id",
    "utc_now_iso",
    "validate_iso_day",
]
