"""Pytest configuration and fixtures."""

from collections.abc import Callable
from typing import Any

import pytest

from smartset.config import SmartSetSettings, reset_settings, set_settings
from smartset.llm import (
    BaseLLMProvider,
    GenerationRequest,
    GenerationResponse,
    LLMClient,
)
from smartset.models import Project, Scene, Strip, Stripboard
from smartset.storage import ProductionStore

CREDENTIAL_VARIABLES = ("SMARTSET_LLM_API_KEY", "GEMINI_API_KEY", "API_KEY")


class FakeProvider(BaseLLMProvider):
    """In-memory provider answering per model with text or an exception."""

    name = "fake"

    def __init__(
        self,
        answers: dict[str, str | Exception] | None = None,
        available: bool = True,
    ) -> None:
        self.answers = answers or {}
        self.available = available
        self.requests: list[GenerationRequest] = []
        self.closed = False

    async def is_available(self) -> bool:
        return self.available

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        self.requests.append(request)
        answer = self.answers.get(
            request.model, RuntimeError("no answer configured")
        )
        if isinstance(answer, Exception):
            raise answer
        return GenerationResponse(model=request.model, text=answer)

    async def aclose(self) -> None:
        self.closed = True


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test",
    )


@pytest.fixture(autouse=True)
def isolated_test_environment(tmp_path, monkeypatch):
    """Run every test against a temporary database and no API credentials."""
    for name in CREDENTIAL_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    db_path = tmp_path / "test_smartset.db"
    monkeypatch.setenv("SMARTSET_DATABASE_PATH", str(db_path))

    settings = SmartSetSettings(database_path=db_path, llm_api_key=None)
    set_settings(settings)

    yield settings

    reset_settings()


@pytest.fixture
def settings(isolated_test_environment) -> SmartSetSettings:
    """Settings of the isolated test environment."""
    return isolated_test_environment


@pytest.fixture
def store(tmp_path):
    """Production store on a temporary SQLite file."""
    production_store = ProductionStore(tmp_path / "store.db")
    yield production_store
    production_store.close()


@pytest.fixture
def project(store) -> Project:
    """A persisted feature film project."""
    return store.create_project("Nightfall")


@pytest.fixture
def make_scene(project) -> Callable[..., Scene]:
    """Build scenes of the project fixture."""

    def _make(
        scene_number: str,
        shoot_day: str | None = None,
        eighths: str = "1/8",
        **fields: Any,
    ) -> Scene:
        return Scene(
            project_id=project.id,
            scene_number=scene_number,
            shoot_day=shoot_day,
            page_count_in_eighths=eighths,
            **fields,
        )

    return _make


@pytest.fixture
def make_board(store, project) -> Callable[..., Stripboard]:
    """Persist scenes and a board with one strip per scene at given orders."""

    def _make(
        scenes: list[Scene],
        orders: list[float] | None = None,
        shooting_days: list[str] | None = None,
    ) -> Stripboard:
        store.save_scenes(project.id, scenes)
        orders = orders if orders is not None else list(range(len(scenes)))
        board = Stripboard(
            project_id=project.id,
            strips=[
                Strip(scene_id=scene.id, order=order)
                for scene, order in zip(scenes, orders, strict=True)
            ],
            shooting_days=shooting_days or [],
        )
        store.save_stripboard(board)
        return board

    return _make


@pytest.fixture
def fake_provider() -> Callable[..., FakeProvider]:
    """Factory for fake LLM providers."""
    return FakeProvider


@pytest.fixture
def make_llm_client() -> Callable[..., LLMClient]:
    """Build an LLM client over a fake provider with a two-model chain."""

    def _make(
        provider: BaseLLMProvider,
        models: list[str] | None = None,
    ) -> LLMClient:
        return LLMClient(provider, models or ["primary-model", "fallback-model"])

    return _make


@pytest.fixture
def api_provider() -> FakeProvider:
    """Fake provider behind the API test client; tests fill in answers."""
    return FakeProvider()


@pytest.fixture
def api_client(settings, api_provider):
    """FastAPI test client running the full application lifespan."""
    from fastapi.testclient import TestClient

    from smartset.api import create_app

    client = LLMClient(api_provider, ["primary-model", "fallback-model"])
    app = create_app(settings, llm_client=client)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def cli_runner():
    """Typer CLI runner."""
    from typer.testing import CliRunner

    return CliRunner()
