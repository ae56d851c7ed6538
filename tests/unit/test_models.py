"""Tests for Smart Set data models."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from smartset.models import (
    BreakdownResult,
    CalendarEvent,
    DayNight,
    IntExt,
    JobStatus,
    Project,
    Scene,
    Strip,
    Stripboard,
    validate_iso_day,
)


class TestProject:
    """Test project model."""

    def test_code_defaults_from_name(self):
        """Project code is the first three letters of the name."""
        assert Project(name="Nightfall").code == "NIG"

    def test_explicit_code_kept(self):
        """An explicit code is not overwritten."""
        assert Project(name="Nightfall", code="NF").code == "NF"

    def test_rejects_malformed_shoot_days(self):
        """Shoot days must be YYYY-MM-DD."""
        with pytest.raises(PydanticValidationError):
            Project(name="X", shoot_days=["2024-1-5"])

    @pytest.mark.parametrize(
        "day", ["2024-W01-1", "2024-001", "20240105", "2024-02-30"]
    )
    def test_rejects_non_calendar_days(self, day):
        """Week dates, ordinal dates and impossible dates are refused."""
        with pytest.raises(ValueError):
            validate_iso_day(day)

    def test_week_date_shoot_day_rejected(self):
        """ISO week dates never reach the stored shoot days."""
        with pytest.raises(PydanticValidationError):
            Project(name="X", shoot_days=["2024-W01-1"])


class TestScene:
    """Test scene model."""

    def test_pages_derived_from_eighths(self):
        """pages follows the eighths string."""
        scene = Scene(project_id="p", scene_number="1", page_count_in_eighths="1 4/8")
        assert scene.pages == 1.5

    def test_eighths_derived_from_pages(self):
        """The eighths string is filled in from pages when missing."""
        scene = Scene(
            project_id="p", scene_number="1", page_count_in_eighths="", pages=2.25
        )
        assert scene.page_count_in_eighths == "2 2/8"

    @pytest.mark.parametrize(
        ("pages", "eighths", "expected"),
        [(1.3, "1 2/8", 1.25), (0.2, "0 2/8", 0.25), (-2, "0 0/8", 0.0)],
    )
    def test_pages_snapped_to_eighths(self, pages, eighths, expected):
        """pages given alone is rounded to the eighths string it produces."""
        scene = Scene(
            project_id="p", scene_number="1", page_count_in_eighths="", pages=pages
        )
        assert scene.page_count_in_eighths == eighths
        assert scene.pages == expected

    def test_with_page_length_recomputes_pages(self):
        """Changing the length keeps both representations consistent."""
        scene = Scene(project_id="p", scene_number="1", page_count_in_eighths="1/8")
        updated = scene.with_page_length("3 1/8")
        assert updated.pages == 3.125
        assert scene.pages == 0.125

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("INT.", IntExt.INT),
            ("ext", IntExt.EXT),
            ("EST.", IntExt.EXT),
            ("I/E", IntExt.INT_EXT),
            ("INT/EXT", IntExt.INT_EXT),
            ("", None),
        ],
    )
    def test_int_ext_spellings(self, raw, expected):
        """Heading flags are normalized."""
        scene = Scene(project_id="p", scene_number="1", int_ext=raw)
        assert scene.int_ext == expected

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("GIORNO", DayNight.DAY),
            ("notte", DayNight.NIGHT),
            ("Dawn", DayNight.DAWN),
            ("TRAMONTO", DayNight.DUSK),
            ("LATER", None),
        ],
    )
    def test_day_night_spellings(self, raw, expected):
        """English and Italian times of day are recognized."""
        scene = Scene(project_id="p", scene_number="1", day_night=raw)
        assert scene.day_night == expected

    def test_blank_shoot_day_is_unscheduled(self):
        """An empty shoot day means unscheduled."""
        scene = Scene(project_id="p", scene_number="1", shoot_day="  ")
        assert scene.shoot_day is None

    def test_invalid_shoot_day_rejected(self):
        """Shoot days must be calendar dates."""
        with pytest.raises(PydanticValidationError):
            Scene(project_id="p", scene_number="1", shoot_day="2024-02-30")

    def test_with_shoot_day_returns_copy(self):
        """Rescheduling does not mutate the original scene."""
        scene = Scene(project_id="p", scene_number="1")
        moved = scene.with_shoot_day("2024-01-02")
        assert moved.shoot_day == "2024-01-02"
        assert moved.id == scene.id
        assert scene.shoot_day is None


class TestStripboard:
    """Test stripboard model."""

    def test_find_strip(self):
        """Strips are found by id."""
        strip = Strip(scene_id="s1")
        board = Stripboard(project_id="p", strips=[strip])
        assert board.find_strip(strip.id) is strip
        assert board.find_strip("missing") is None

    def test_default_name(self):
        """Boards are called Main Board unless named."""
        assert Stripboard(project_id="p").name == "Main Board"


class TestBreakdownResult:
    """Test the extraction result shape."""

    def test_parses_camel_case(self):
        """The model's camelCase keys populate the fields."""
        result = BreakdownResult.model_validate(
            {
                "scenes": [
                    {
                        "sceneNumber": 12,
                        "intExt": "INT",
                        "pageCountInEighths": "1 2/8",
                    }
                ],
                "elements": [{"name": "GUN", "category": "Props"}],
                "sceneElements": {"12": ["GUN"]},
            }
        )
        assert result.scenes[0].scene_number == "12"
        assert result.scenes[0].page_count_in_eighths == "1 2/8"
        assert result.scene_elements == {"12": ["GUN"]}


def test_calendar_event_date_validated():
    """Events need a calendar date."""
    with pytest.raises(PydanticValidationError):
        CalendarEvent(project_id="p", date="tomorrow", title="Scout")


def test_job_status_terminal():
    """Only done and error stop polling."""
    assert JobStatus.DONE.is_terminal
    assert JobStatus.ERROR.is_terminal
    assert not JobStatus.PARSING.is_terminal
