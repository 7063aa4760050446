"""Base abstractions for external provider clients.

Defines the three provider roles the watchlist depends on. Concrete clients
(OMDb, TMDB) inherit from these classes; the aggregator only sees the
interfaces, which keeps it testable with in-process fakes.
"""

from abc import ABC, abstractmethod

from moviewatchlist.metadata.models import ImageBundle, MovieMetadata


class MetadataProvider(ABC):
    """Resolves a title to canonical director/year/genre/title metadata."""

    name: str = "metadata"

    @abstractmethod
    async def fetch_metadata(self, title: str) -> MovieMetadata:
        """Fetch canonical metadata for *title*.

        Args:
            title: Human-readable title, as typed by the user.

        Returns:
            The provider's metadata for the title.

        Raises:
            NotFoundError: If the provider reports the title as unknown.
            ProviderError: On transport or parse failure.
        """
        raise NotImplementedError


class ImageProvider(ABC):
    """Resolves a title to artwork and downloads it locally."""

    name: str = "images"

    @abstractmethod
    async def fetch_images(self, title: str) -> ImageBundle:
        """Download up to three images for *title*.

        Raises:
            NotFoundError: If the title has no search hits.
            NoImagesError: If the title has neither posters nor backdrops.
            ProviderError: On transport or parse failure, or any failed download.
        """
        raise NotImplementedError


class SimilarityProvider(ABC):
    """Lists titles related to a given title."""

    name: str = "similar"

    @abstractmethod
    async def fetch_similar(self, title: str) -> list[str]:
        """Return related titles in provider order (possibly empty).

        Raises:
            NotFoundError: If the title has no search hits.
            ProviderError: On transport or parse failure.
        """
        raise NotImplementedError
