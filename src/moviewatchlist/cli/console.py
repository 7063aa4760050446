"""Rich console configuration shared by the CLI commands.

Commands obtain their console from :class:`ConsoleManager`, which honours the
``--no-rich`` flag (exported as ``MOVIEWATCHLIST_NO_RICH``) so output can be
piped or captured without colour codes and spinners.
"""

from __future__ import annotations

import os
from contextlib import AbstractContextManager
from typing import Any

from rich.console import Console

from moviewatchlist.errors import MovieWatchlistError

__all__ = ["console", "ConsoleManager", "make_console", "print_error", "rich_enabled"]

NO_RICH_ENV = "MOVIEWATCHLIST_NO_RICH"
_TRUTHY = frozenset({"1", "true", "yes"})

# Module-level console for code that prints outside a command.
console: Console = Console()


def rich_enabled() -> bool:
    """Return False when MOVIEWATCHLIST_NO_RICH is set to a truthy value."""
    return os.getenv(NO_RICH_ENV, "0").lower() not in _TRUTHY


def make_console(use_rich: bool, *, record: bool = False, **kwargs: Any) -> Console:
    """Build a console; plain consoles emit no colour or control sequences."""
    if not use_rich:
        kwargs.setdefault("color_system", None)
        kwargs.setdefault("force_terminal", False)
    return Console(record=record, **kwargs)


def print_error(target: Console, exc: MovieWatchlistError) -> None:
    """Print a watchlist error as a single red line."""
    target.print(f"[red]Error: {exc}[/red]", highlight=False)


class ConsoleManager(AbstractContextManager):
    """Yield a console configured for the current invocation.

    Args:
        record: Keep output so tests can read it back with ``export_text``.
        force_use: Override the environment check (True/False), or None to
            follow ``MOVIEWATCHLIST_NO_RICH``.
        console_kwargs: Passed through to :class:`rich.console.Console`.
    """

    def __init__(
        self,
        *,
        record: bool = False,
        force_use: bool | None = None,
        **console_kwargs: Any,
    ) -> None:
        self.use_rich = rich_enabled() if force_use is None else force_use
        self._record = record
        self._console_kwargs = console_kwargs
        self.console: Console | None = None

    def __enter__(self) -> Console:
        self.console = make_console(
            self.use_rich, record=self._record, **self._console_kwargs
        )
        return self.console

    def __exit__(self, exc_type, exc_val, exc_tb):  # type: ignore[override]
        if self.console is not None:
            self.console.file.flush()
        return False
