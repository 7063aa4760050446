"""CLI commands for moviewatchlist.

This module implements all user-facing CLI commands: add, list, watched, rate,
delete, similar, config and version.
- Uses Typer for declarative CLI structure and option parsing.
- All output is routed through Rich Console for consistent, styled UX.
- Each command builds a WatchlistService, runs one async operation with
  ``asyncio.run`` and maps watchlist errors to exit codes.

Design:
- Storage locations are resolved once in the app callback with the precedence
  CLI option > env var > config file > default, and passed via ``ctx.obj``.
- Provider API keys are only required by commands that call the providers
  (add, similar).
- Exit codes are defined as an Enum for clarity and maintainability.
"""

import asyncio
import os
import sys
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional, TypeVar

import typer
from rich.console import Console

from moviewatchlist.cli.console import ConsoleManager, print_error
from moviewatchlist.cli.renderer import render_movie, render_movies, render_similar
from moviewatchlist.core.watchlist import WatchlistService
from moviewatchlist.errors import MovieWatchlistError, NotFoundError
from moviewatchlist.fs.storage import get_default_db_path, get_images_dir
from moviewatchlist.metadata.settings import Settings
from moviewatchlist.utils.config import get_default_page_size, resolve_setting, set_default_page_size
from moviewatchlist.utils.debug import setup_logger
from moviewatchlist.utils.json import dumps

T = TypeVar("T")

app = typer.Typer(
    name="moviewatchlist",
    help="Build a personal movie watchlist enriched from OMDb and TMDB.",
    add_completion=True,
)
config_app = typer.Typer(help="Manage persistent moviewatchlist preferences.")
app.add_typer(config_app, name="config")


class ExitCode(int, Enum):
    """Exit codes for CLI commands."""

    SUCCESS = 0
    ERROR = 1
    NOT_FOUND = 2


@dataclass
class GlobalOptions:
    """Storage locations shared by every command."""

    db_path: Path
    images_dir: Path


MOVIE_ID = Annotated[int, typer.Argument(help="Watchlist id of the movie")]

JSON_OUTPUT = Annotated[
    bool,
    typer.Option("--json", help="Output results in JSON format"),
]


def build_service(options: GlobalOptions, *required_keys: str) -> WatchlistService:
    """Create the service for one command invocation.

    Args:
        options: Resolved storage locations.
        required_keys: Provider API keys the command needs.

    Raises:
        MissingAPIKeyError: If a required key is not configured.
    """
    settings = Settings()
    if required_keys:
        settings.require_keys(*required_keys)
    return WatchlistService.from_settings(
        db_path=options.db_path,
        images_dir=options.images_dir,
        settings=settings,
    )


def _run(
    ctx: typer.Context,
    console: Console,
    operation: Callable[[WatchlistService], Awaitable[T]],
    *required_keys: str,
) -> T:
    """Run *operation* against a fresh service and map errors to exit codes."""
    options: GlobalOptions = ctx.obj

    async def runner() -> T:
        async with build_service(options, *required_keys) as service:
            return await operation(service)

    try:
        return asyncio.run(runner())
    except NotFoundError as exc:
        print_error(console, exc)
        raise typer.Exit(ExitCode.NOT_FOUND)
    except MovieWatchlistError as exc:
        print_error(console, exc)
        raise typer.Exit(ExitCode.ERROR)


@app.callback()
def callback(
    ctx: typer.Context,
    no_rich: bool = typer.Option(
        False,
        "--no-rich",
        help=(
            "Disable Rich coloured output and spinners. "
            "Can also be set with the MOVIEWATCHLIST_NO_RICH environment variable."
        ),
    ),
    db: Optional[Path] = typer.Option(
        None,
        "--db",
        help="Watchlist database file (default: ~/.moviewatchlist/watchlist.db).",
    ),
    images_dir: Optional[Path] = typer.Option(
        None,
        "--images-dir",
        help="Artwork directory (default: ~/.moviewatchlist/images).",
    ),
) -> None:
    """Global options shared by all commands."""
    if no_rich:
        os.environ["MOVIEWATCHLIST_NO_RICH"] = "1"
    setup_logger()
    if ctx.resilient_parsing:
        return
    ctx.obj = GlobalOptions(
        db_path=resolve_setting(
            "storage.db_path", default=get_default_db_path(), cli_value=db
        ),
        images_dir=resolve_setting(
            "storage.images_dir", default=get_images_dir(), cli_value=images_dir
        ),
    )


@app.command()
def add(
    ctx: typer.Context,
    title: Annotated[str, typer.Argument(help="Movie title to add")],
    json_output: JSON_OUTPUT = False,
) -> None:
    """Add a movie by title, fetching metadata and artwork."""
    with ConsoleManager() as console:
        with console.status(f"[cyan]Looking up {title}...", spinner="dots"):
            movie = _run(
                ctx,
                console,
                lambda service: service.add_movie(title),
                "OMDB_API_KEY",
                "TMDB_API_KEY",
            )
        if json_output:
            sys.stdout.write(dumps(movie) + "\n")
            return
        console.print("[green]Added to watchlist:[/green]")
        render_movie(movie, console=console)


@app.command("list")
def list_movies(
    ctx: typer.Context,
    page: Annotated[int, typer.Option("--page", "-p", help="Zero-based page index")] = 0,
    size: Annotated[
        Optional[int], typer.Option("--size", "-s", help="Movies per page")
    ] = None,
    json_output: JSON_OUTPUT = False,
) -> None:
    """List the watchlist one page at a time."""
    page_size = size if size is not None else get_default_page_size()
    with ConsoleManager() as console:
        result = _run(ctx, console, lambda service: service.get_all_movies(page, page_size))
        if json_output:
            sys.stdout.write(dumps(result) + "\n")
            return
        render_movies(result, console=console)


@app.command()
def watched(
    ctx: typer.Context,
    movie_id: MOVIE_ID,
    unwatched: Annotated[
        bool, typer.Option("--unwatched", help="Mark the movie as not watched")
    ] = False,
) -> None:
    """Mark a movie as watched (or not watched)."""
    with ConsoleManager() as console:
        _run(ctx, console, lambda service: service.update_watched(movie_id, not unwatched))
        state = "not watched" if unwatched else "watched"
        console.print(f"Movie #{movie_id} marked as {state}.")


@app.command()
def rate(
    ctx: typer.Context,
    movie_id: MOVIE_ID,
    rating: Annotated[int, typer.Argument(help="Rating from 1 to 5")],
) -> None:
    """Rate a movie from 1 to 5."""
    with ConsoleManager() as console:
        _run(ctx, console, lambda service: service.update_rating(movie_id, rating))
        console.print(f"Movie #{movie_id} rated {rating}.")


@app.command()
def delete(ctx: typer.Context, movie_id: MOVIE_ID) -> None:
    """Remove a movie from the watchlist."""
    with ConsoleManager() as console:
        _run(ctx, console, lambda service: service.delete_movie(movie_id))
        console.print(f"Movie #{movie_id} removed.")


@app.command()
def similar(
    ctx: typer.Context,
    movie_id: MOVIE_ID,
    json_output: JSON_OUTPUT = False,
) -> None:
    """Show movies similar to one on the watchlist."""
    with ConsoleManager() as console:
        with console.status("[cyan]Finding similar movies...", spinner="dots"):
            titles = _run(
                ctx,
                console,
                lambda service: service.get_similar(movie_id),
                "TMDB_API_KEY",
            )
        if json_output:
            sys.stdout.write(dumps(titles) + "\n")
            return
        render_similar(f"movie #{movie_id}", titles, console=console)


@config_app.command("set-page-size")
def set_page_size(
    size: Annotated[int, typer.Argument(min=1, help="Default movies per page")],
) -> None:
    """Persist the default page size for ``list``."""
    set_default_page_size(size)
    with ConsoleManager() as console:
        console.print(f"Default page size set to {size}.")


@app.command()
def version() -> None:
    """Show the version of moviewatchlist."""
    from moviewatchlist.__about__ import __version__

    with ConsoleManager() as console:
        console.print(f"MovieWatchlist version: [bold]{__version__}[/bold]")


def main() -> None:
    """Main entry point for the CLI."""
    app()
