"""Shared test fixtures for coursesync tests."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from coursesync.config import Settings, SyncConfig, SyncConfigLoader
from coursesync.sync import SyncFacade
from coursesync.vcs import FakeVersionControl

CONTENT_PATH = "content/courses"
EDIT_URL = "https://github.com/{repository}/edit/{branch}/{content_path}/{path}"

WriteConfigFunc = Callable[..., Path]


def sync_config_data(**overrides: object) -> dict[str, object]:
    """Build the ``git`` section of a sync configuration artifact."""
    section: dict[str, object] = {
        "repository": "acme/courses",
        "branch": "main",
        "contentPath": CONTENT_PATH,
        "editUrl": EDIT_URL,
    }
    section.update(overrides)
    return {"git": section}


@pytest.fixture
def content_path() -> str:
    return CONTENT_PATH


@pytest.fixture
def write_config(tmp_path: Path) -> WriteConfigFunc:
    """Return a function that writes the sync configuration artifact."""

    def _write(root: Path | None = None, **overrides: object) -> Path:
        config_path = (root or tmp_path) / "content" / "config.json"
        config_path.parent.mkdir(parents=True, exist_ok=True)
        _ = config_path.write_text(json.dumps(sync_config_data(**overrides)))
        return config_path

    return _write


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(project_root=tmp_path)


@pytest.fixture
def configured(settings: Settings, write_config: WriteConfigFunc) -> Settings:
    """Settings whose project root holds a valid sync configuration."""
    _ = write_config(settings.project_root)
    return settings


@pytest.fixture
def sync_config() -> SyncConfig:
    return SyncConfig.model_validate(sync_config_data()["git"])


@pytest.fixture
def config_loader(configured: Settings) -> SyncConfigLoader:
    return SyncConfigLoader.from_settings(configured)


@pytest.fixture
def vcs() -> FakeVersionControl:
    return FakeVersionControl()


@pytest.fixture
def facade(configured: Settings, vcs: FakeVersionControl) -> SyncFacade:
    return SyncFacade(configured, vcs)
