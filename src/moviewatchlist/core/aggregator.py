"""Enrichment and aggregation pipeline.

The aggregator turns a bare title into a persisted :class:`MovieRecord`:

- The metadata provider and the image provider are queried concurrently; both
  depend only on the title. The aggregator waits for both (fork-join) before
  merging, so the merge always sees a complete result or a complete failure
  from each side.
- A metadata failure is fatal: nothing is persisted and the error propagates.
- An image failure is non-fatal: the record is saved with ``image_path`` set to
  IMAGE_UNAVAILABLE and the failure is logged.

It also owns the similar-movies lookup, which reads the stored title and hands
it to the similarity provider's two-hop search.
"""

import asyncio
import logging

from moviewatchlist.errors import MovieWatchlistError, NotFoundError
from moviewatchlist.metadata.base import ImageProvider, MetadataProvider, SimilarityProvider
from moviewatchlist.metadata.models import ImageBundle
from moviewatchlist.models.core import IMAGE_UNAVAILABLE, MovieRecord
from moviewatchlist.utils.watchlist_store import WatchlistStore

logger = logging.getLogger(__name__)


class Aggregator:
    """Coordinates providers and the store for add-movie and similar-movies."""

    def __init__(
        self,
        metadata: MetadataProvider,
        images: ImageProvider,
        similar: SimilarityProvider,
        store: WatchlistStore,
    ) -> None:
        self.metadata = metadata
        self.images = images
        self.similar = similar
        self.store = store

    def _image_path(self, title: str, outcome: ImageBundle | BaseException) -> str:
        """Reduce the image task's outcome to the path stored on the record."""
        if isinstance(outcome, ImageBundle):
            return str(outcome.primary)
        if isinstance(outcome, MovieWatchlistError):
            logger.warning(f"Artwork unavailable for {title!r}: {outcome}")
            return IMAGE_UNAVAILABLE
        raise outcome

    async def add_movie(self, title: str) -> MovieRecord:
        """Enrich *title* from both providers and persist the merged record.

        Returns:
            The stored record, with its assigned id.

        Raises:
            NotFoundError: If the metadata provider does not know the title.
            ProviderError: If the metadata provider request fails.
        """
        metadata_outcome, image_outcome = await asyncio.gather(
            self.metadata.fetch_metadata(title),
            self.images.fetch_images(title),
            return_exceptions=True,
        )

        if isinstance(metadata_outcome, BaseException):
            logger.info(f"Metadata lookup failed for {title!r}: {metadata_outcome}")
            raise metadata_outcome

        image_path = self._image_path(title, image_outcome)
        record = MovieRecord.from_metadata(metadata_outcome, image_path)
        saved = await self.store.save(record)
        logger.info(f"Added {saved.title!r} (id={saved.id}, image={saved.image_path})")
        return saved

    async def get_similar(self, record_id: int) -> list[str]:
        """Return titles similar to the stored movie *record_id*.

        Raises:
            NotFoundError: If no record has that id, or the provider cannot
                resolve the stored title.
            ProviderError: If either provider request fails.
        """
        record = await self.store.get(record_id)
        if record is None:
            raise NotFoundError(record_id)
        return await self.similar.fetch_similar(record.title)
