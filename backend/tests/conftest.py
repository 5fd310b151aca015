"""Shared pytest fixtures for the swarm priority test suite."""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from app.core.config import settings
from app.db import crud
from app.db.database import init_database
from app.main import app
from app.services.orchestrator import get_random_source

SCENARIO_TITLE = "Critical bug"
SCENARIO_DESCRIPTION = "crashing the app for everyone, totally broken"


class FixedRandom:
    """Random source that always returns the same value."""

    def __init__(self, value: float = 0.0) -> None:
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture
def fixed_rng():
    """Factory for FixedRandom sources."""
    return FixedRandom


@pytest.fixture
def db_path(tmp_path: Path, monkeypatch) -> Path:
    """Point the app at a fresh SQLite file for each test."""
    path = tmp_path / "swarm.db"
    monkeypatch.setattr(settings, "db_path", str(path))
    monkeypatch.setattr(settings, "refresh_ranking_on_reanalysis", False)
    init_database()
    return path


@pytest.fixture
def make_feedback(db_path):
    def _make(
        title: str = "Export button",
        description: str = "Please add a CSV export to reports",
        source: str = "form",
        **kwargs,
    ) -> dict:
        return crud.create_feedback(title=title, description=description, source=source, **kwargs)

    return _make


@pytest.fixture
def scenario_feedback(make_feedback) -> dict:
    return make_feedback(title=SCENARIO_TITLE, description=SCENARIO_DESCRIPTION)


@pytest.fixture
def client(db_path):
    app.dependency_overrides[get_random_source] = lambda: FixedRandom(0.0)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
