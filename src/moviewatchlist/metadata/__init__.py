"""Provider layer: metadata, artwork and similar-movie lookups."""

from moviewatchlist.metadata.base import (
    ImageProvider,
    MetadataProvider,
    SimilarityProvider,
)
from moviewatchlist.metadata.models import ImageBundle, MovieMetadata

__all__ = [
    "ImageBundle",
    "ImageProvider",
    "MetadataProvider",
    "MovieMetadata",
    "SimilarityProvider",
]
