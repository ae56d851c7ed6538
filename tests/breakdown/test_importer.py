"""Tests for importing a breakdown into a project."""

import pytest

from smartset.breakdown.importer import build_elements, import_breakdown
from smartset.exceptions import NotFoundError
from smartset.models import BreakdownResult, DayNight, ElementCategory, IntExt

RESULT = BreakdownResult.model_validate(
    {
        "scenes": [
            {
                "sceneNumber": "1",
                "intExt": "INT.",
                "dayNight": "GIORNO",
                "pageCountInEighths": "1 2/8",
            },
            {"sceneNumber": "2", "intExt": "EXT", "dayNight": "NOTTE"},
        ],
        "elements": [
            {"name": "ANNA", "category": "Cast"},
            {"name": "ANNA", "category": "Props"},
            {"name": "MARCO", "category": "Characters"},
            {"name": "Pan", "category": "Arredamento/Attrezzeria"},
            {"name": "  ", "category": "Props"},
        ],
        "sceneElements": {"1": ["ANNA", "Pan", "Ghost"], "2": ["MARCO"]},
    }
)


class TestBuildElements:
    """Test element creation from a breakdown."""

    def test_first_name_wins_and_cast_numbered(self):
        """Duplicate and blank names are dropped; cast members are numbered."""
        elements = build_elements("p", RESULT)

        assert [e.name for e in elements] == ["ANNA", "MARCO", "Pan"]
        assert [e.category for e in elements] == [
            ElementCategory.CAST,
            ElementCategory.CAST,
            ElementCategory.PROPS,
        ]
        assert [e.cast_id for e in elements] == [1, 2, None]
        assert elements[2].raw_category == "Arredamento/Attrezzeria"


class TestImportBreakdown:
    """Test persisting an import."""

    def test_creates_scenes_elements_board_and_version(self, store, project):
        """Every record of the import is stored."""
        imported = import_breakdown(store, project.id, RESULT, file_name="v1.pdf")

        scenes = store.get_project_scenes(project.id)
        assert [s.scene_number for s in scenes] == ["1", "2"]
        assert scenes[0].int_ext == IntExt.INT
        assert scenes[0].day_night == DayNight.DAY
        assert scenes[1].day_night == DayNight.NIGHT
        assert scenes[1].page_count_in_eighths == "0 0/8"

        names = {e.id: e.name for e in store.get_elements(project.id)}
        assert [names[i] for i in scenes[0].element_ids] == ["ANNA", "Pan"]

        board = store.get_stripboard(imported.stripboard.id)
        assert [s.scene_id for s in board.strips] == [s.id for s in scenes]

        loaded = store.get_project(project.id)
        assert loaded.total_scenes == 2
        assert loaded.total_pages == 1.25
        assert loaded.current_script_id == imported.script_version.id
        assert imported.script_version.version == 1

    def test_reimport_bumps_version_and_replaces_scenes(self, store, project):
        """A second import replaces scenes and counts versions up."""
        import_breakdown(store, project.id, RESULT)
        second = import_breakdown(store, project.id, RESULT)

        assert second.script_version.version == 2
        assert len(store.get_project_scenes(project.id)) == 2
        assert len(store.get_stripboards(project.id)) == 2

    def test_unknown_project(self, store):
        """Imports need an existing project."""
        with pytest.raises(NotFoundError):
            import_breakdown(store, "nope", RESULT)
