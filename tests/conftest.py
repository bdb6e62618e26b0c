"""Shared fixtures: isolated config directory and rate-schedule helpers."""

import json
from pathlib import Path

import pytest
import yaml

from payportal.sdk.contributions import clear_schedule_cache
from payportal.sdk.contributions.schedules import PACKAGED_SCHEDULES_DIR


def packaged_schedule_data(year: int = 2025) -> dict:
    """Raw dict of a packaged schedule file, for building variants."""
    with open(PACKAGED_SCHEDULES_DIR / f"{year}.yaml") as f:
        return yaml.safe_load(f)


def write_schedule(directory: Path, year: int, data: dict) -> Path:
    """Write a {year}.yaml rate schedule file."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{year}.yaml"
    path.write_text(yaml.dump(data, sort_keys=False))
    return path


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point the SDK at an empty config directory and reset cached schedules."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("PAY_PORTAL_CONFIG_PATH", str(config_dir))

    clear_schedule_cache()
    yield {"config_dir": config_dir, "tmp_path": tmp_path}
    clear_schedule_cache()


@pytest.fixture
def write_settings(isolated_config):
    """Write settings.json into the isolated config directory."""
    def _write(settings: dict) -> Path:
        path = isolated_config["config_dir"] / "settings.json"
        path.write_text(json.dumps(settings))
        return path
    return _write


@pytest.fixture
def schedule_data():
    """Mutable copy of the packaged 2025 schedule."""
    return packaged_schedule_data(2025)


@pytest.fixture
def custom_schedules_dir(isolated_config):
    """Directory for custom schedule files plus a writer for it."""
    directory = isolated_config["tmp_path"] / "schedules"
    directory.mkdir()

    def _write(year: int, data: dict) -> Path:
        return write_schedule(directory, year, data)

    return directory, _write
