"""Shared test fixtures."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from taskcollect.api.dependencies import get_collection_cache, get_settings
from taskcollect.config import Settings
from taskcollect.main import app
from taskcollect.tasks.collector import CollectionCache


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def vault(tmp_path: Path) -> Path:
    path = tmp_path / "vault"
    path.mkdir()
    return path


@pytest.fixture
def write_note(vault: Path):
    """Write a note into the vault, creating folders as needed."""

    def _write(relative: str, content: str) -> Path:
        path = vault / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def override_settings():
    """Swap the API's settings and cache for the duration of a test.

    The cache never debounces, so each request collects afresh.
    """
    cache = CollectionCache(staleness_seconds=0.0)

    def _override(**values) -> Settings:
        settings = Settings(**values)
        app.dependency_overrides[get_settings] = lambda: settings
        app.dependency_overrides[get_collection_cache] = lambda: cache
        return settings

    yield _override
    app.dependency_overrides.clear()
