"""Shared fixtures for the moviewatchlist test suite."""

from pathlib import Path

import pytest

from moviewatchlist.metadata.settings import Settings
from moviewatchlist.utils import config


@pytest.fixture
def settings() -> Settings:
    """Provider settings with dummy keys and default endpoints."""
    return Settings(OMDB_API_KEY="omdb-key", TMDB_API_KEY="tmdb-key")  # pragma: allowlist secret


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME and the config file at a temporary directory for every test."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    config_dir = tmp_path / "config" / "moviewatchlist"
    monkeypatch.setattr(config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config, "CONFIG_FILE", config_dir / "config.toml")
    for var in (
        "MOVIEWATCHLIST_STORAGE_DB_PATH",
        "MOVIEWATCHLIST_STORAGE_IMAGES_DIR",
        "MOVIEWATCHLIST_LIST_PAGE_SIZE",
        "MOVIEWATCHLIST_NO_RICH",
    ):
        monkeypatch.delenv(var, raising=False)
    return home
