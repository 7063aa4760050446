"""Utility modules for moviewatchlist."""

from moviewatchlist.utils.json import WatchlistEncoder
from moviewatchlist.utils.watchlist_store import SQLiteWatchlistStore, WatchlistStore

__all__ = [
    "WatchlistEncoder",
    "WatchlistStore",
    "SQLiteWatchlistStore",
]
