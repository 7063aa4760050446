"""Domain models for moviewatchlist."""

from moviewatchlist.models.core import IMAGE_UNAVAILABLE, MovieRecord, Page

__all__ = ["IMAGE_UNAVAILABLE", "MovieRecord", "Page"]
