"""Watchlist operations exposed to the outer layers (CLI or a web app).

:class:`WatchlistService` is the single entry point: it validates caller input,
delegates enrichment and similar-movie lookups to the :class:`Aggregator`, and
performs the simple read/modify/delete operations directly against the store.
The store is trusted to serialise writes per record; the service takes no locks.
"""

import logging
from pathlib import Path
from types import TracebackType
from typing import Optional, Self

import httpx

from moviewatchlist.core.aggregator import Aggregator
from moviewatchlist.errors import NotFoundError, ValidationError
from moviewatchlist.metadata.clients import OMDbClient, TMDBClient, TMDBImageClient
from moviewatchlist.metadata.settings import Settings
from moviewatchlist.models.core import MAX_RATING, MIN_RATING, MovieRecord, Page
from moviewatchlist.utils.watchlist_store import SQLiteWatchlistStore, WatchlistStore

logger = logging.getLogger(__name__)


class WatchlistService:
    """Add, list, update, delete and explore movies on the watchlist."""

    def __init__(
        self,
        aggregator: Aggregator,
        store: WatchlistStore,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            aggregator: Provider pipeline for add-movie and similar-movies.
            store: Record storage.
            http_client: Client shared by the providers; closed by :meth:`aclose`.
        """
        self.aggregator = aggregator
        self.store = store
        self._http_client = http_client

    @classmethod
    def from_settings(
        cls,
        db_path: Path,
        images_dir: Path,
        settings: Settings | None = None,
    ) -> "WatchlistService":
        """Wire the default OMDb/TMDB providers and SQLite store.

        One ``httpx.AsyncClient`` is shared by all providers; its timeout
        (``REQUEST_TIMEOUT``) bounds every single provider call.
        """
        settings = settings or Settings()
        client = httpx.AsyncClient(timeout=settings.REQUEST_TIMEOUT)
        store = SQLiteWatchlistStore(db_path)
        aggregator = Aggregator(
            metadata=OMDbClient(settings, client=client),
            images=TMDBImageClient(settings, client=client, images_dir=images_dir),
            similar=TMDBClient(settings, client=client),
            store=store,
        )
        return cls(aggregator, store, http_client=client)

    async def aclose(self) -> None:
        """Release the shared HTTP client, if any."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()

    async def _require(self, record_id: int) -> MovieRecord:
        record = await self.store.get(record_id)
        if record is None:
            raise NotFoundError(record_id)
        return record

    async def add_movie(self, title: str) -> MovieRecord:
        """Add *title* to the watchlist, enriched from the providers."""
        if not title or not title.strip():
            raise ValidationError("Title must not be empty")
        return await self.aggregator.add_movie(title)

    async def get_all_movies(self, page: int = 0, size: int = 10) -> Page[MovieRecord]:
        """Return one zero-based page of the watchlist."""
        if page < 0:
            raise ValidationError(f"Page must be >= 0, got {page}")
        if size < 1:
            raise ValidationError(f"Page size must be >= 1, got {size}")
        return await self.store.page(page, size)

    async def update_watched(self, record_id: int, watched: bool) -> None:
        """Set the watched flag of a movie."""
        record = await self._require(record_id)
        await self.store.update(record.model_copy(update={"watched": watched}))
        logger.debug(f"Movie {record_id} watched={watched}")

    async def update_rating(self, record_id: int, rating: int) -> None:
        """Set the rating of a movie (1 to 5)."""
        if not MIN_RATING <= rating <= MAX_RATING:
            raise ValidationError(
                f"Rating must be between {MIN_RATING} and {MAX_RATING}, got {rating}"
            )
        record = await self._require(record_id)
        await self.store.update(record.model_copy(update={"rating": rating}))
        logger.debug(f"Movie {record_id} rating={rating}")

    async def delete_movie(self, record_id: int) -> None:
        """Remove a movie from the watchlist. Its artwork files are kept."""
        if not await self.store.delete(record_id):
            raise NotFoundError(record_id)
        logger.info(f"Deleted movie {record_id}")

    async def get_similar(self, record_id: int) -> list[str]:
        """Return titles similar to the stored movie *record_id*."""
        return await self.aggregator.get_similar(record_id)
