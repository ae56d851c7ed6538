"""Pydantic schemas for API request/response models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from smartset.breakdown.suggestions import Suggestions
from smartset.models import (
    BreakdownResult,
    BreakdownSummary,
    DayNight,
    EventType,
    IntExt,
    ProductionType,
    ScriptVersion,
)
from smartset.scheduling import BoardSummary, Direction, ScheduleView


# Project models
class ProjectCreateRequest(BaseModel):
    """Project creation request."""

    name: str = Field(min_length=1, max_length=200)
    type: ProductionType = ProductionType.FEATURE
    shoot_days: list[str] = Field(default_factory=list)


# Scene models
class SceneUpdateRequest(BaseModel):
    """Partial scene update; omitted fields are left unchanged."""

    slugline: str | None = None
    int_ext: IntExt | None = None
    day_night: DayNight | None = None
    set_name: str | None = None
    location_name: str | None = None
    page_count_in_eighths: str | None = None
    synopsis: str | None = None
    element_ids: list[str] | None = None
    shoot_day: str | None = Field(
        default=None, description="YYYY-MM-DD, or an empty string to unschedule"
    )


class ElementCreateRequest(BaseModel):
    """Production element creation request."""

    name: str = Field(min_length=1, max_length=200)
    category: str | None = Field(default=None, description="Free-text category")


# Stripboard models
class StripboardSummaryResponse(BaseModel):
    """Stripboard listing entry."""

    id: str
    name: str
    scene_count: int
    day_count: int
    total_pages: float
    total_eighths: str

    @classmethod
    def from_summary(cls, summary: BoardSummary) -> "StripboardSummaryResponse":
        return cls(
            id=summary.board_id,
            name=summary.name,
            scene_count=summary.scene_count,
            day_count=summary.day_count,
            total_pages=summary.total_pages,
            total_eighths=summary.total_eighths,
        )


class StripView(BaseModel):
    """One visible strip with the scene fields a board row shows."""

    strip_id: str
    scene_id: str
    order: float
    scene_number: str
    slugline: str
    int_ext: IntExt | None
    day_night: DayNight | None
    set_name: str
    location_name: str
    page_count_in_eighths: str


class BucketResponse(BaseModel):
    """Strips of one shooting day (``day`` is null for unscheduled)."""

    day: str | None
    strips: list[StripView]


class ScheduleResponse(BaseModel):
    """Stripboard grouped into day buckets."""

    id: str
    project_id: str
    name: str
    days: list[str]
    buckets: list[BucketResponse]

    @classmethod
    def from_view(
        cls, board_id: str, project_id: str, name: str, view: ScheduleView
    ) -> "ScheduleResponse":
        buckets = []
        for bucket in view.buckets:
            strips = []
            for strip in bucket.strips:
                scene = view.scene_for(strip)
                strips.append(
                    StripView(
                        strip_id=strip.id,
                        scene_id=scene.id,
                        order=strip.order,
                        scene_number=scene.scene_number,
                        slugline=scene.slugline,
                        int_ext=scene.int_ext,
                        day_night=scene.day_night,
                        set_name=scene.set_name,
                        location_name=scene.location_name,
                        page_count_in_eighths=scene.page_count_in_eighths,
                    )
                )
            buckets.append(BucketResponse(day=bucket.day, strips=strips))
        return cls(
            id=board_id,
            project_id=project_id,
            name=name,
            days=view.days,
            buckets=buckets,
        )


class MoveRequest(BaseModel):
    """Strip move request."""

    strip_id: str
    direction: Direction


class MoveResponse(BaseModel):
    """Strip move result with the refreshed schedule."""

    moved: bool
    strip_id: str
    order: float
    from_day: str | None = None
    to_day: str | None = None
    schedule: ScheduleResponse


class DaysRequest(BaseModel):
    """New shooting days: an explicit list or an inclusive range."""

    days: list[str] | None = None
    start: str | None = None
    end: str | None = None

    @model_validator(mode="after")
    def check_days_or_range(self) -> "DaysRequest":
        """Require exactly one way of giving the days."""
        has_range = self.start is not None and self.end is not None
        if (self.days is None) == (not has_range):
            raise ValueError("Provide either 'days' or both 'start' and 'end'")
        return self


class DaysResponse(BaseModel):
    """Result of replacing the shooting days."""

    days: list[str]
    rescheduled_scene_ids: list[str]
    schedule: ScheduleResponse


class RenormalizeResponse(BaseModel):
    """Result of rewriting strip orders."""

    buckets_changed: int


# Calendar models
class EventCreateRequest(BaseModel):
    """Calendar event creation or replacement request."""

    date: str
    title: str = Field(min_length=1, max_length=200)
    type: EventType = EventType.GENERAL
    scenes: list[str] = Field(default_factory=list)
    notes: str | None = None
    time: str | None = None


class PlannedDayRequest(BaseModel):
    """Scene numbers planned on one date, as a list or free text."""

    date: str
    scenes: list[str] | str = Field(default_factory=list)


class GenerateEventsRequest(BaseModel):
    """Shooting plan to turn into calendar events."""

    days: list[PlannedDayRequest]


# Manual board models
class ManualSceneRequest(BaseModel):
    """One scene entered through the manual board form."""

    scene_number: str = Field(min_length=1)
    int_ext: str = "INT"
    day_night: str = "DAY"
    set_name: str = ""
    location_name: str = ""
    pages: str = "1/8"
    synopsis: str = ""
    element_ids: list[str] = Field(default_factory=list)


class DraftCurrentRequest(BaseModel):
    """Partially filled scene form."""

    current_scene: dict[str, Any] = Field(default_factory=dict)


class FinishManualBoardRequest(BaseModel):
    """Name of the board created from the draft."""

    name: str = "Manual Board"


# Breakdown and AI models
class BreakdownRequest(BaseModel):
    """Screenplay PDF to analyze."""

    model_config = ConfigDict(populate_by_name=True)

    pdf_base64: str = Field(default="", alias="pdfBase64")


class BreakdownResponse(BaseModel):
    """Synchronous breakdown result."""

    ok: bool = True
    data: BreakdownResult
    summary: BreakdownSummary
    model_used: str


class JobStartResponse(BaseModel):
    """Identifier of a queued breakdown job."""

    ok: bool = True
    job_id: str


class ImportRequest(BaseModel):
    """Breakdown to import: an inline result or a finished job."""

    result: BreakdownResult | None = None
    job_id: str | None = None
    file_name: str = "script.pdf"

    @model_validator(mode="after")
    def check_source(self) -> "ImportRequest":
        """Require exactly one source."""
        if (self.result is None) == (self.job_id is None):
            raise ValueError("Provide either 'result' or 'job_id'")
        return self


class ImportResponse(BaseModel):
    """Records created by an import."""

    scene_count: int
    element_count: int
    stripboard_id: str
    script_version: ScriptVersion


class SuggestionsRequest(BaseModel):
    """Scene context to enrich."""

    context: str = ""


class SuggestionsResponse(BaseModel):
    """AI suggestions."""

    ok: bool = True
    suggestions: Suggestions


class HealthResponse(BaseModel):
    """Result of pinging the primary model."""

    ok: bool
    model_id: str
    text: str | None = None
    error: str | None = None


class EnvResponse(BaseModel):
    """Which credential variables are present; values are never returned."""

    ok: bool = True
    environment: str
    key_present: bool
    details: dict[str, bool]
    primary_model: str
    fallback_models: list[str]
    timestamp: str
