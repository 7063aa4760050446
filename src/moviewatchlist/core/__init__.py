"""Core watchlist logic: the aggregation pipeline and the exposed operations."""

from moviewatchlist.core.aggregator import Aggregator
from moviewatchlist.core.watchlist import WatchlistService

__all__ = ["Aggregator", "WatchlistService"]
