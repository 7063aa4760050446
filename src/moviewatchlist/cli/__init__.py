"""Command-line interface for moviewatchlist.

- app: The Typer application object, used by the console-script entry point.
- console: Rich Console instance for modules that print outside a command.

All commands live in :mod:`moviewatchlist.cli.commands`.
"""

from rich.traceback import install

from moviewatchlist.cli.commands import app, main
from moviewatchlist.cli.console import console

# Install rich traceback handler for all CLI commands
install(show_locals=False)

__all__ = ["app", "console", "main"]

if __name__ == "__main__":
    main()
