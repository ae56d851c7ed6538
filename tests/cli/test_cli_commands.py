"""Tests for the command line interface."""

import json
from unittest.mock import patch

import pytest

from smartset import __version__
from smartset.cli.main import app
from smartset.models import Scene
from smartset.storage import ProductionStore


@pytest.fixture
def seeded(settings):
    """A project with one unscheduled scene and one scheduled scene."""
    store = ProductionStore(settings.database_path)
    project = store.create_project("Nightfall")
    scenes = [
        Scene(project_id=project.id, scene_number="1"),
        Scene(project_id=project.id, scene_number="2", shoot_day="2024-01-01"),
    ]
    store.save_scenes(project.id, scenes)
    board = store.create_default_stripboard(project.id, scenes)
    store.close()
    return {"project": project, "board": board, "scenes": scenes}


def _json(result):
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


class TestGlobalCommands:
    """Test version and status."""

    def test_version_json(self, cli_runner):
        """Version is reported as JSON."""
        data = _json(cli_runner.invoke(app, ["version", "--json"]))
        assert data == {"name": "Smart Set", "version": __version__}

    def test_status_counts_projects(self, cli_runner, seeded):
        """Status reports the database and project count."""
        data = _json(cli_runner.invoke(app, ["status", "--json"]))
        assert data["database_exists"] is True
        assert data["projects"] == 1
        assert data["api_key_configured"] is False

    def test_serve_uses_settings(self, cli_runner):
        """The server command starts uvicorn with the given port."""
        with patch("smartset.api.main.main") as run_api:
            result = cli_runner.invoke(app, ["serve", "--port", "9001"])
        assert result.exit_code == 0
        run_api.assert_called_once_with(host="127.0.0.1", port=9001)


class TestProjectCommands:
    """Test project commands."""

    def test_create_and_list(self, cli_runner):
        """Created projects show up in the list."""
        created = _json(
            cli_runner.invoke(
                app,
                [
                    "project",
                    "create",
                    "Tide",
                    "-t",
                    "short",
                    "-d",
                    "2024-06-01",
                    "--json",
                ],
            )
        )
        assert created["type"] == "short"
        assert created["shoot_days"] == ["2024-06-01"]

        listed = _json(cli_runner.invoke(app, ["project", "list", "--json"]))
        assert [p["id"] for p in listed] == [created["id"]]

    def test_create_plain_output(self, cli_runner):
        """Without --json a confirmation is printed."""
        result = cli_runner.invoke(app, ["project", "create", "Tide"])
        assert result.exit_code == 0
        assert "Created project" in result.stdout


class TestBoardCommands:
    """Test stripboard commands."""

    def test_list(self, cli_runner, seeded):
        """Board summaries are listed."""
        data = _json(
            cli_runner.invoke(
                app, ["board", "list", seeded["project"].id, "--json"]
            )
        )
        assert data[0]["board_id"] == seeded["board"].id
        assert data[0]["scene_count"] == 2

    def test_show(self, cli_runner, seeded):
        """The schedule is shown bucket by bucket."""
        data = _json(
            cli_runner.invoke(app, ["board", "show", seeded["board"].id, "--json"])
        )
        assert data["days"] == ["2024-01-01"]
        assert [b["day"] for b in data["buckets"]] == [None, "2024-01-01"]

    def test_move_across_days(self, cli_runner, seeded, settings):
        """Moving the unscheduled strip down schedules its scene."""
        strip_id = seeded["board"].strips[0].id
        data = _json(
            cli_runner.invoke(
                app, ["board", "move", seeded["board"].id, strip_id, "down", "--json"]
            )
        )
        assert data["moved"] is True
        assert data["to_day"] == "2024-01-01"

        store = ProductionStore(settings.database_path)
        assert store.get_scene(seeded["scenes"][0].id).shoot_day == "2024-01-01"
        store.close()

    def test_days_range(self, cli_runner, seeded):
        """A range replaces the shooting days."""
        data = _json(
            cli_runner.invoke(
                app,
                [
                    "board",
                    "days",
                    seeded["board"].id,
                    "--start",
                    "2024-02-01",
                    "--end",
                    "2024-02-03",
                    "--json",
                ],
            )
        )
        assert data["success"] is True
        assert data["data"]["days"] == ["2024-02-01", "2024-02-02", "2024-02-03"]
        assert data["data"]["rescheduled"] == [seeded["scenes"][1].id]

    def test_days_requires_input(self, cli_runner, seeded):
        """Calling days without days fails with a hint."""
        result = cli_runner.invoke(
            app, ["board", "days", seeded["board"].id, "--json"]
        )
        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data["success"] is False
        assert "hint" in data

    def test_renormalize(self, cli_runner, seeded):
        """Renormalizing reports the changed buckets."""
        data = _json(
            cli_runner.invoke(
                app, ["board", "renormalize", seeded["board"].id, "--json"]
            )
        )
        assert data["data"] == {"buckets_changed": 1}

    def test_missing_board(self, cli_runner):
        """Unknown boards exit with an error."""
        result = cli_runner.invoke(app, ["board", "show", "nope"])
        assert result.exit_code == 1
        assert "Stripboard not found" in result.stdout


class TestImportCommand:
    """Test the screenplay import command."""

    def test_requires_credentials(self, cli_runner, seeded, tmp_path):
        """Without an API key the import stops with a hint."""
        pdf = tmp_path / "script.pdf"
        pdf.write_bytes(b"%PDF-1.4 test screenplay")

        result = cli_runner.invoke(
            app, ["import", seeded["project"].id, str(pdf), "--json"]
        )

        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert "API key" in data["error"]
        assert "GEMINI_API_KEY" in data["hint"]

    def test_rejects_non_pdf(self, cli_runner, seeded, tmp_path):
        """Only PDF files are accepted."""
        text = tmp_path / "script.txt"
        text.write_text("INT. HOUSE - DAY")

        result = cli_runner.invoke(app, ["import", seeded["project"].id, str(text)])

        assert result.exit_code == 1
        assert "Not a PDF file" in result.stdout
