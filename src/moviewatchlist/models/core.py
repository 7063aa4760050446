"""Core domain models for moviewatchlist.

- MovieRecord is the aggregated watchlist entry: metadata from the metadata
  provider, one image path from the image provider, and the user's own
  watched/rating state.
- Page is one slice of the watchlist as returned by the store.

Design:
- ``id`` is None until the store persists the record.
- ``image_path`` holds IMAGE_UNAVAILABLE when artwork could not be fetched.
- Only ``watched`` and ``rating`` change after creation.
"""

from math import ceil
from typing import Generic, TypeVar

from pydantic import BaseModel, Field, field_validator

from moviewatchlist.metadata.models import MovieMetadata

IMAGE_UNAVAILABLE = "unavailable"
DEFAULT_RATING = 0
MIN_RATING = 1
MAX_RATING = 5

T = TypeVar("T")


class MovieRecord(BaseModel):
    """A movie on the watchlist."""

    id: int | None = None
    title: str
    director: str
    release_year: str
    genre: str
    watched: bool = False
    rating: int = DEFAULT_RATING
    image_path: str = IMAGE_UNAVAILABLE

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be empty")
        return value

    @classmethod
    def from_metadata(cls, metadata: MovieMetadata, image_path: str) -> "MovieRecord":
        """Compose a new, unsaved record with the fixed creation defaults."""
        return cls(
            title=metadata.title,
            director=metadata.director,
            release_year=metadata.release_year,
            genre=metadata.genre,
            watched=False,
            rating=DEFAULT_RATING,
            image_path=image_path,
        )

    @property
    def has_image(self) -> bool:
        """Whether artwork was stored for this record."""
        return self.image_path != IMAGE_UNAVAILABLE


class Page(BaseModel, Generic[T]):
    """One zero-based page of results."""

    items: list[T] = Field(default_factory=list)
    page: int
    size: int
    total: int

    @property
    def total_pages(self) -> int:
        """Number of pages needed to hold *total* items."""
        return ceil(self.total / self.size) if self.size else 0
