"""Tests for the moviewatchlist CLI commands.

The service factory is patched so commands run against a temporary SQLite
store and in-process providers; no network access is needed.
"""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from moviewatchlist.cli import commands
from moviewatchlist.cli.commands import ExitCode, GlobalOptions, app
from moviewatchlist.core.aggregator import Aggregator
from moviewatchlist.core.watchlist import WatchlistService
from moviewatchlist.errors import NoImagesError, NotFoundError
from moviewatchlist.metadata.base import ImageProvider, MetadataProvider, SimilarityProvider
from moviewatchlist.metadata.models import ImageBundle, MovieMetadata
from moviewatchlist.utils.watchlist_store import SQLiteWatchlistStore

runner = CliRunner(env={"COLUMNS": "240"})

CATALOG = {
    "inception": MovieMetadata(
        title="Inception", director="Christopher Nolan", release_year="2010", genre="Sci-Fi"
    ),
    "heat": MovieMetadata(
        title="Heat", director="Michael Mann", release_year="1995", genre="Crime"
    ),
}


class CatalogMetadata(MetadataProvider):
    async def fetch_metadata(self, title: str) -> MovieMetadata:
        try:
            return CATALOG[title.lower()]
        except KeyError:
            raise NotFoundError(title, provider="omdb") from None


class StubImages(ImageProvider):
    def __init__(self, images_dir: Path) -> None:
        self.images_dir = images_dir

    async def fetch_images(self, title: str) -> ImageBundle:
        if title.lower() != "inception":
            raise NoImagesError(title)
        return ImageBundle(paths=[self.images_dir / "Inception" / "image1.jpg"])


class StubSimilar(SimilarityProvider):
    async def fetch_similar(self, title: str) -> list[str]:
        return ["Interstellar", "Tenet"] if title == "Inception" else []


@pytest.fixture
def patched_service(monkeypatch: pytest.MonkeyPatch) -> list[tuple[str, ...]]:
    """Replace the service factory; records the API keys each command required."""
    required: list[tuple[str, ...]] = []

    def fake_build_service(options: GlobalOptions, *keys: str) -> WatchlistService:
        required.append(keys)
        store = SQLiteWatchlistStore(options.db_path)
        aggregator = Aggregator(
            CatalogMetadata(), StubImages(options.images_dir), StubSimilar(), store
        )
        return WatchlistService(aggregator, store)

    monkeypatch.setattr(commands, "build_service", fake_build_service)
    return required


def _invoke(tmp_path: Path, *args: str):
    return runner.invoke(
        app,
        ["--db", str(tmp_path / "w.db"), "--images-dir", str(tmp_path / "img"), *args],
    )


def _json(output: str) -> object:
    start = min(i for i in (output.find("{"), output.find("[")) if i >= 0)
    return json.loads(output[start:])


def test_add_and_list(tmp_path: Path, patched_service: list) -> None:
    result = _invoke(tmp_path, "add", "inception")
    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert "Inception" in result.output
    assert patched_service == [("OMDB_API_KEY", "TMDB_API_KEY")]

    result = _invoke(tmp_path, "list")
    assert result.exit_code == 0, result.output
    assert "Inception" in result.output
    assert "Total: 1 | Showing: 1" in result.output


def test_add_without_artwork_warns(tmp_path: Path, patched_service: list) -> None:
    result = _invoke(tmp_path, "add", "heat")
    assert result.exit_code == 0, result.output
    assert "Artwork unavailable" in result.output


def test_add_json(tmp_path: Path, patched_service: list) -> None:
    result = _invoke(tmp_path, "add", "inception", "--json")
    assert result.exit_code == 0, result.output
    data = _json(result.stdout)
    assert data["id"] == 1
    assert data["watched"] is False
    assert data["rating"] == 0
    assert data["image_path"].endswith("image1.jpg")


def test_add_unknown_title_exit_code(tmp_path: Path, patched_service: list) -> None:
    result = _invoke(tmp_path, "add", "nope")
    assert result.exit_code == ExitCode.NOT_FOUND
    assert "Not found" in result.output

    listing = _invoke(tmp_path, "list", "--json")
    assert _json(listing.stdout)["total"] == 0


def test_watched_rate_delete(tmp_path: Path, patched_service: list) -> None:
    _invoke(tmp_path, "add", "inception")
    _invoke(tmp_path, "add", "heat")

    assert _invoke(tmp_path, "watched", "1").exit_code == 0
    assert _invoke(tmp_path, "rate", "1", "5").exit_code == 0
    assert _invoke(tmp_path, "delete", "2").exit_code == 0

    data = _json(_invoke(tmp_path, "list", "--json").stdout)
    assert data["total"] == 1
    assert data["items"][0]["watched"] is True
    assert data["items"][0]["rating"] == 5

    assert _invoke(tmp_path, "watched", "1", "--unwatched").exit_code == 0
    data = _json(_invoke(tmp_path, "list", "--json").stdout)
    assert data["items"][0]["watched"] is False
    # Commands that never call a provider need no API keys.
    assert ("OMDB_API_KEY", "TMDB_API_KEY") in patched_service
    assert () in patched_service


def test_rate_out_of_range(tmp_path: Path, patched_service: list) -> None:
    _invoke(tmp_path, "add", "heat")
    result = _invoke(tmp_path, "rate", "1", "9")
    assert result.exit_code == ExitCode.ERROR
    assert "Rating must be between 1 and 5" in result.output


@pytest.mark.parametrize("args", [("delete", "42"), ("watched", "42"), ("similar", "42")])
def test_unknown_id(tmp_path: Path, patched_service: list, args: tuple[str, ...]) -> None:
    result = _invoke(tmp_path, *args)
    assert result.exit_code == ExitCode.NOT_FOUND


def test_similar(tmp_path: Path, patched_service: list) -> None:
    _invoke(tmp_path, "add", "inception")
    _invoke(tmp_path, "add", "heat")

    result = _invoke(tmp_path, "similar", "1", "--json")
    assert result.exit_code == 0, result.output
    assert _json(result.stdout) == ["Interstellar", "Tenet"]
    assert patched_service[-1] == ("TMDB_API_KEY",)

    result = _invoke(tmp_path, "similar", "2")
    assert result.exit_code == 0
    assert "No similar movies found" in result.output


def test_list_paging_options(tmp_path: Path, patched_service: list) -> None:
    _invoke(tmp_path, "add", "inception")
    _invoke(tmp_path, "add", "heat")

    data = _json(_invoke(tmp_path, "list", "--page", "1", "--size", "1", "--json").stdout)
    assert [m["title"] for m in data["items"]] == ["Heat"]
    assert data["total"] == 2

    result = _invoke(tmp_path, "list", "--page=-1")
    assert result.exit_code == ExitCode.ERROR


def test_config_set_page_size_used_by_list(tmp_path: Path, patched_service: list) -> None:
    result = runner.invoke(app, ["config", "set-page-size", "3"])
    assert result.exit_code == 0, result.output

    data = _json(_invoke(tmp_path, "list", "--json").stdout)
    assert data["size"] == 3


def test_missing_api_key(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("OMDB_API_KEY", raising=False)
    monkeypatch.delenv("TMDB_API_KEY", raising=False)

    result = _invoke(tmp_path, "add", "inception")

    assert result.exit_code == ExitCode.ERROR
    assert "Missing required API key" in result.output


def test_storage_locations_from_env(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, patched_service: list
) -> None:
    db_path = tmp_path / "env" / "env.db"
    monkeypatch.setenv("MOVIEWATCHLIST_STORAGE_DB_PATH", str(db_path))

    result = runner.invoke(app, ["add", "heat"])

    assert result.exit_code == 0, result.output
    assert db_path.exists()


def test_no_rich_flag(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, patched_service: list) -> None:
    monkeypatch.setenv("MOVIEWATCHLIST_NO_RICH", "0")
    result = runner.invoke(app, ["--no-rich", "--db", str(tmp_path / "w.db"), "list"])
    assert result.exit_code == 0, result.output
    assert "\x1b[" not in result.output


def test_version() -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "MovieWatchlist version" in result.output
