"""Tests for stripboard scheduling endpoints."""

import json

import pytest

from smartset.models import Scene, Strip

API = "/api/v1"


@pytest.fixture
def board(api_client):
    """A board with two unscheduled scenes and two on consecutive days."""
    store = api_client.app.state.store
    project = store.create_project("Nightfall")
    scenes = [
        Scene(
            project_id=project.id,
            scene_number=number,
            shoot_day=day,
            page_count_in_eighths="1/8",
        )
        for number, day in [
            ("1", None),
            ("2", None),
            ("3", "2024-01-01"),
            ("4", "2024-01-02"),
        ]
    ]
    store.save_scenes(project.id, scenes)
    board = store.create_default_stripboard(project.id, scenes)
    return {"id": board.id, "project_id": project.id, "strips": board.strips}


def _bucket_numbers(schedule):
    return [
        [strip["scene_number"] for strip in bucket["strips"]]
        for bucket in schedule["buckets"]
    ]


class TestSchedule:
    """Test reading a schedule."""

    def test_grouped_view(self, api_client, board):
        """Strips are grouped into unscheduled and day buckets."""
        schedule = api_client.get(f"{API}/stripboards/{board['id']}").json()

        assert schedule["days"] == ["2024-01-01", "2024-01-02"]
        assert [b["day"] for b in schedule["buckets"]] == [
            None,
            "2024-01-01",
            "2024-01-02",
        ]
        assert _bucket_numbers(schedule) == [["1", "2"], ["3"], ["4"]]

    def test_missing_board(self, api_client):
        """Unknown boards give 404."""
        assert api_client.get(f"{API}/stripboards/nope").status_code == 404

    def test_project_board_summaries(self, api_client, board):
        """The project lists its boards with totals."""
        summaries = api_client.get(
            f"{API}/projects/{board['project_id']}/stripboards"
        ).json()
        assert summaries == [
            {
                "id": board["id"],
                "name": "Main Board",
                "scene_count": 4,
                "day_count": 2,
                "total_pages": 0.5,
                "total_eighths": "0 4/8",
            }
        ]

    def test_create_additional_board(self, api_client, board):
        """New boards hold every scene."""
        response = api_client.post(
            f"{API}/projects/{board['project_id']}/stripboards",
            params={"name": "Alt"},
        )
        assert response.status_code == 201
        assert response.json()["name"] == "Alt"
        assert response.json()["scene_count"] == 4


class TestMove:
    """Test strip moves."""

    def test_same_bucket_swap(self, api_client, board):
        """Moving the second unscheduled strip up swaps the pair."""
        response = api_client.post(
            f"{API}/stripboards/{board['id']}/move",
            json={"strip_id": board["strips"][1].id, "direction": "up"},
        )

        body = response.json()
        assert response.status_code == 200
        assert body["moved"] is True
        assert body["from_day"] is None
        assert body["to_day"] is None
        assert _bucket_numbers(body["schedule"])[0] == ["2", "1"]

    def test_cross_day_move(self, api_client, board):
        """Moving the last strip of a day down lands in the next day."""
        response = api_client.post(
            f"{API}/stripboards/{board['id']}/move",
            json={"strip_id": board["strips"][2].id, "direction": "down"},
        )

        body = response.json()
        assert body["to_day"] == "2024-01-02"
        assert body["order"] == 2
        assert _bucket_numbers(body["schedule"]) == [["1", "2"], ["3", "4"]]
        scene = api_client.app.state.store.get_scene(board["strips"][2].scene_id)
        assert scene.shoot_day == "2024-01-02"

    def test_boundary_is_noop(self, api_client, board):
        """The last strip of the last day cannot move down."""
        response = api_client.post(
            f"{API}/stripboards/{board['id']}/move",
            json={"strip_id": board["strips"][3].id, "direction": "down"},
        )
        assert response.status_code == 200
        assert response.json()["moved"] is False

    def test_unknown_strip(self, api_client, board):
        """Unknown strips give 404."""
        response = api_client.post(
            f"{API}/stripboards/{board['id']}/move",
            json={"strip_id": "nope", "direction": "up"},
        )
        assert response.status_code == 404

    def test_bad_direction(self, api_client, board):
        """Directions other than up and down fail validation."""
        response = api_client.post(
            f"{API}/stripboards/{board['id']}/move",
            json={"strip_id": board["strips"][0].id, "direction": "left"},
        )
        assert response.status_code == 422


class TestDays:
    """Test replacing shooting days."""

    def test_explicit_days_remap_by_position(self, api_client, board):
        """Scenes move to the day at the same index; extras unschedule."""
        response = api_client.put(
            f"{API}/stripboards/{board['id']}/days",
            json={"days": ["2024-03-10"]},
        )

        body = response.json()
        assert body["days"] == ["2024-03-10"]
        assert len(body["rescheduled_scene_ids"]) == 2
        assert _bucket_numbers(body["schedule"]) == [["1", "2", "4"], ["3"]]

    def test_range(self, api_client, board):
        """A start and end expand to every day in between."""
        response = api_client.put(
            f"{API}/stripboards/{board['id']}/days",
            json={"start": "2024-01-01", "end": "2024-01-03"},
        )
        assert response.json()["days"] == ["2024-01-01", "2024-01-02", "2024-01-03"]
        assert response.json()["rescheduled_scene_ids"] == []

    def test_reversed_range(self, api_client, board):
        """Ranges ending before they start give 400."""
        response = api_client.put(
            f"{API}/stripboards/{board['id']}/days",
            json={"start": "2024-01-05", "end": "2024-01-01"},
        )
        assert response.status_code == 400

    def test_invalid_day(self, api_client, board):
        """Malformed days give 400."""
        response = api_client.put(
            f"{API}/stripboards/{board['id']}/days", json={"days": ["05/01/2024"]}
        )
        assert response.status_code == 400

    def test_days_and_range_together(self, api_client, board):
        """Only one way of giving days is accepted."""
        response = api_client.put(
            f"{API}/stripboards/{board['id']}/days",
            json={"days": ["2024-01-01"], "start": "2024-01-01", "end": "2024-01-02"},
        )
        assert response.status_code == 422


class TestMaintenance:
    """Test renormalize, optimize and delete."""

    def test_renormalize(self, api_client, board):
        """Buckets with gaps are renumbered."""
        store = api_client.app.state.store
        saved = store.get_stripboard(board["id"])
        saved.strips[0].order = 10
        saved.strips.append(Strip(scene_id="orphan", order=99))
        store.save_stripboard(saved)

        response = api_client.post(f"{API}/stripboards/{board['id']}/renormalize")

        assert response.json() == {"buckets_changed": 3}
        again = api_client.post(f"{API}/stripboards/{board['id']}/renormalize")
        assert again.json() == {"buckets_changed": 0}

    def test_optimize(self, api_client, api_provider, board):
        """The model's order is applied and returned."""
        store = api_client.app.state.store
        scene_ids = [s.scene_id for s in board["strips"]]
        api_provider.answers["primary-model"] = json.dumps(
            {"orderedSceneIds": [scene_ids[1], scene_ids[0]]}
        )

        response = api_client.post(f"{API}/stripboards/{board['id']}/optimize")

        assert response.status_code == 200
        assert _bucket_numbers(response.json())[0] == ["2", "1"]
        assert [s.scene_id for s in store.get_stripboard(board["id"]).strips][
            :2
        ] == [scene_ids[1], scene_ids[0]]

    def test_optimize_without_credentials(self, api_client, api_provider, board):
        """Missing credentials give 401."""
        api_provider.available = False
        response = api_client.post(f"{API}/stripboards/{board['id']}/optimize")
        assert response.status_code == 401

    def test_optimize_model_failure(self, api_client, board):
        """Failing models give 502."""
        response = api_client.post(f"{API}/stripboards/{board['id']}/optimize")
        assert response.status_code == 502

    def test_delete(self, api_client, board):
        """Deleted boards are gone."""
        assert api_client.delete(f"{API}/stripboards/{board['id']}").status_code == 200
        assert api_client.delete(f"{API}/stripboards/{board['id']}").status_code == 404
