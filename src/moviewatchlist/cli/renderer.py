"""Renderer for CLI output.

Renders watchlist pages and similar-movie lists as Rich tables.
"""

from rich.console import Console
from rich.table import Table

from moviewatchlist.models.core import MovieRecord, Page


def _rating_cell(rating: int) -> str:
    return "★" * rating if rating else "-"


def render_movies(page: Page[MovieRecord], console: Console | None = None) -> None:
    """Render one page of the watchlist as a table with a page summary."""
    console = console or Console()

    table = Table(title=f"Watchlist (page {page.page + 1} of {max(page.total_pages, 1)})")
    table.add_column("ID", justify="right", style="bold")
    table.add_column("Title", style="cyan")
    table.add_column("Year")
    table.add_column("Director")
    table.add_column("Genre", style="magenta")
    table.add_column("Watched")
    table.add_column("Rating", style="yellow")
    table.add_column("Image")

    for movie in page.items:
        table.add_row(
            str(movie.id),
            movie.title,
            movie.release_year,
            movie.director,
            movie.genre,
            "yes" if movie.watched else "no",
            _rating_cell(movie.rating),
            movie.image_path if movie.has_image else "[dim]unavailable[/dim]",
            style="green" if movie.watched else None,
        )

    console.print(table)
    console.print(f"Total: {page.total} | Showing: {len(page.items)}")


def render_movie(movie: MovieRecord, console: Console | None = None) -> None:
    """Print a one-line summary of a single record."""
    console = console or Console()
    console.print(
        f"[bold]#{movie.id}[/bold] [cyan]{movie.title}[/cyan] ({movie.release_year}) "
        f"by {movie.director} - {movie.genre}"
    )
    if not movie.has_image:
        console.print("[yellow]Artwork unavailable for this title.[/yellow]")


def render_similar(title: str, titles: list[str], console: Console | None = None) -> None:
    """Render the titles similar to *title*, numbered in provider order."""
    console = console or Console()
    if not titles:
        console.print(f"[yellow]No similar movies found for {title}.[/yellow]")
        return
    table = Table(title=f"Similar to {title}")
    table.add_column("#", justify="right")
    table.add_column("Title", style="cyan")
    for index, similar in enumerate(titles, start=1):
        table.add_row(str(index), similar)
    console.print(table)
