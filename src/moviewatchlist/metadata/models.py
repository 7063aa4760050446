"""Data models for provider results.

This module defines the provider-side shapes that the aggregator merges into a
persisted :class:`~moviewatchlist.models.core.MovieRecord`.

- MovieMetadata is what the metadata provider (OMDb) reports for a title.
- ImageBundle is the outcome of a successful artwork download: up to three local
  files, with the first one designated as the primary image.
- ImageCandidate is one artwork entry selected from the provider's listing
  before download.

Provider payloads are parsed straight into these models so that downstream code
never touches raw JSON.
"""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

MAX_BUNDLE_IMAGES = 3


class ImageKind(str, Enum):
    """Artwork categories reported by the image provider."""

    POSTER = "poster"
    BACKDROP = "backdrop"


class MovieMetadata(BaseModel):
    """Canonical movie metadata as reported by the metadata provider.

    Values are stored exactly as the provider returns them; the title may differ
    in casing or spelling from what the user typed.
    """

    title: str
    director: str
    release_year: str
    genre: str
    provider: str = "omdb"

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be empty")
        return value


class ImageCandidate(BaseModel):
    """A single artwork path chosen from the provider's images listing."""

    file_path: str
    kind: ImageKind = ImageKind.POSTER


class ImageBundle(BaseModel):
    """Ordered set of downloaded artwork files for one title."""

    paths: list[Path] = Field(default_factory=list, max_length=MAX_BUNDLE_IMAGES)
    """Absolute local paths, in download order (image1, image2, image3)."""
    candidates: list[ImageCandidate] = Field(default_factory=list)
    """The provider entries the files were downloaded from, same order as paths."""

    @property
    def primary(self) -> Path:
        """The representative image (always the first file)."""
        return self.paths[0]
