"""Tests for project, scene, element, calendar and manual board endpoints."""

import pytest

API = "/api/v1"


@pytest.fixture
def project_id(api_client):
    """Create a project through the API."""
    response = api_client.post(
        f"{API}/projects/", json={"name": "Nightfall", "type": "short"}
    )
    assert response.status_code == 201
    return response.json()["id"]


class TestRootEndpoints:
    """Test the application level endpoints."""

    def test_root_and_health(self, api_client):
        """Root and health answer without touching the store."""
        assert api_client.get("/").json()["message"] == "Smart Set API"
        assert api_client.get("/health").json() == {"status": "healthy"}


class TestProjects:
    """Test project endpoints."""

    def test_create_list_get(self, api_client, project_id):
        """Created projects are listed and retrievable."""
        projects = api_client.get(f"{API}/projects/").json()
        assert [p["id"] for p in projects] == [project_id]

        project = api_client.get(f"{API}/projects/{project_id}").json()
        assert project["name"] == "Nightfall"
        assert project["code"] == "NIG"
        assert project["type"] == "short"

    def test_missing_project(self, api_client):
        """Unknown projects give 404."""
        response = api_client.get(f"{API}/projects/nope")
        assert response.status_code == 404
        assert "nope" in response.json()["detail"]

    def test_invalid_shoot_day(self, api_client):
        """Malformed shoot days give 400."""
        response = api_client.post(
            f"{API}/projects/", json={"name": "X", "shoot_days": ["tomorrow"]}
        )
        assert response.status_code == 400

    def test_empty_name_rejected(self, api_client):
        """Request validation rejects empty names."""
        response = api_client.post(f"{API}/projects/", json={"name": ""})
        assert response.status_code == 422


class TestElements:
    """Test element endpoints."""

    def test_add_classifies_and_delete(self, api_client, project_id):
        """Elements are classified on creation and can be deleted."""
        response = api_client.post(
            f"{API}/projects/{project_id}/elements",
            json={"name": "Revolver", "category": "hand props"},
        )
        assert response.status_code == 201
        element = response.json()
        assert element["category"] == "Props"

        listed = api_client.get(f"{API}/projects/{project_id}/elements").json()
        assert [e["id"] for e in listed] == [element["id"]]

        deleted = api_client.delete(
            f"{API}/projects/{project_id}/elements/{element['id']}"
        )
        assert deleted.json() == {"deleted": True}
        again = api_client.delete(
            f"{API}/projects/{project_id}/elements/{element['id']}"
        )
        assert again.status_code == 404


class TestScenes:
    """Test scene endpoints."""

    @pytest.fixture
    def scene_id(self, api_client, project_id):
        """Build a one-scene project through the manual board."""
        api_client.post(
            f"{API}/projects/{project_id}/manual-board/scenes",
            json={"scene_number": "1", "set_name": "KITCHEN"},
        )
        api_client.post(f"{API}/projects/{project_id}/manual-board/finish", json={})
        scenes = api_client.get(f"{API}/projects/{project_id}/scenes").json()
        return scenes[0]["id"]

    def test_patch_page_length_updates_pages(self, api_client, project_id, scene_id):
        """A new eighths string recomputes pages and the project total."""
        response = api_client.patch(
            f"{API}/scenes/{scene_id}",
            json={"page_count_in_eighths": "2 4/8", "synopsis": "Breakfast"},
        )
        assert response.status_code == 200
        assert response.json()["pages"] == 2.5
        assert response.json()["synopsis"] == "Breakfast"

        project = api_client.get(f"{API}/projects/{project_id}").json()
        assert project["total_pages"] == 2.5

    def test_patch_invalid_shoot_day(self, api_client, scene_id):
        """Bad shoot days are rejected."""
        response = api_client.patch(
            f"{API}/scenes/{scene_id}", json={"shoot_day": "2024-02-31"}
        )
        assert response.status_code in {400, 422}

    def test_missing_scene(self, api_client):
        """Unknown scenes give 404."""
        assert api_client.get(f"{API}/scenes/nope").status_code == 404


class TestCalendar:
    """Test calendar endpoints."""

    def test_event_crud(self, api_client, project_id):
        """Events can be created, updated, listed and deleted."""
        created = api_client.post(
            f"{API}/projects/{project_id}/events",
            json={"date": "2024-04-01", "title": "Location scout"},
        )
        assert created.status_code == 201
        event = created.json()

        updated = api_client.put(
            f"{API}/projects/{project_id}/events/{event['id']}",
            json={"date": "2024-04-02", "title": "Tech scout", "time": "10:00"},
        )
        assert updated.json()["date"] == "2024-04-02"
        assert updated.json()["id"] == event["id"]

        listed = api_client.get(f"{API}/projects/{project_id}/events").json()
        assert [e["title"] for e in listed] == ["Tech scout"]

        api_client.delete(f"{API}/projects/{project_id}/events/{event['id']}")
        assert api_client.get(f"{API}/projects/{project_id}/events").json() == []

    def test_generate_shooting_events(self, api_client, project_id):
        """A plan becomes one shooting event per non-empty day."""
        response = api_client.post(
            f"{API}/projects/{project_id}/events/generate",
            json={
                "days": [
                    {"date": "2024-05-01", "scenes": "1, 2"},
                    {"date": "2024-05-02", "scenes": []},
                    {"date": "2024-05-03", "scenes": ["7"]},
                ]
            },
        )
        assert response.status_code == 201
        events = response.json()
        assert [e["title"] for e in events] == [
            "Shooting - Scenes 1, 2",
            "Shooting - Scenes 7",
        ]
        assert all(e["type"] == "shooting" for e in events)


class TestManualBoard:
    """Test the manual board endpoints."""

    def test_draft_flow(self, api_client, project_id):
        """Form state, added scenes and finishing all persist."""
        base = f"{API}/projects/{project_id}/manual-board"

        saved = api_client.put(base, json={"current_scene": {"scene_number": "4"}})
        assert saved.json()["current_scene"] == {"scene_number": "4"}

        draft = api_client.post(
            f"{base}/scenes",
            json={"scene_number": "4", "int_ext": "EXT", "pages": "1 0/8"},
        ).json()
        assert draft["current_scene"] == {}
        assert len(draft["scenes"]) == 1

        finished = api_client.post(f"{base}/finish", json={"name": "Second unit"})
        assert finished.status_code == 201
        assert finished.json()["name"] == "Second unit"
        assert finished.json()["scene_count"] == 1

        assert api_client.get(base).json()["scenes"] == []

    def test_finish_empty_draft(self, api_client, project_id):
        """An empty draft cannot be finished."""
        response = api_client.post(
            f"{API}/projects/{project_id}/manual-board/finish", json={}
        )
        assert response.status_code == 400

    def test_clear_draft(self, api_client, project_id):
        """Drafts can be discarded."""
        base = f"{API}/projects/{project_id}/manual-board"
        api_client.post(f"{base}/scenes", json={"scene_number": "1"})
        assert api_client.delete(base).json() == {"cleared": True}
        assert api_client.get(base).json()["scenes"] == []
