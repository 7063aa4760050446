"""TMDB artwork client: the watchlist's image provider.

Runs a three-stage lookup for a title:

1. SEARCH: ``/search/movie`` resolves the title to a TMDB id (first hit wins).
2. RESOLVE_IMAGES: ``/movie/{id}/images`` is reduced to at most three file
   paths, posters first and backdrops filling the remaining slots.
3. DOWNLOAD: every selected path is fetched from the image CDN, then written
   to ``<images_dir>/<safe_title>/image{n}.jpg``.

Any failed download aborts the whole bundle; nothing is written in that case.
"""

import asyncio
import logging
from pathlib import Path

import httpx

from moviewatchlist.errors import NoImagesError, ProviderError
from moviewatchlist.fs.storage import get_images_dir, write_image_bundle
from moviewatchlist.metadata.base import ImageProvider
from moviewatchlist.metadata.http import get_bytes, get_json, open_client
from moviewatchlist.metadata.models import ImageBundle, ImageCandidate
from moviewatchlist.metadata.resolver import resolve_first_id
from moviewatchlist.metadata.settings import Settings
from moviewatchlist.metadata.utils import select_image_candidates

logger = logging.getLogger(__name__)

PROVIDER = "tmdb"


class TMDBImageClient(ImageProvider):
    """Image provider backed by TMDB's images endpoints."""

    name = PROVIDER

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
        images_dir: Path | None = None,
    ) -> None:
        """Initialize the image client.

        Args:
            settings: Provider settings; loaded from the environment if omitted.
            client: Shared HTTP client. When omitted a client is opened per call.
            images_dir: Artwork root; defaults to ``~/.moviewatchlist/images``.
        """
        self.settings = settings or Settings()
        self._client = client
        self.images_dir = images_dir

    @property
    def _params(self) -> dict[str, str]:
        return {"api_key": self.settings.TMDB_API_KEY or ""}

    def image_url(self, file_path: str) -> str:
        """Build the CDN URL for a TMDB ``file_path``."""
        base = self.settings.TMDB_IMAGE_BASE_URL.rstrip("/")
        size = self.settings.TMDB_IMAGE_SIZE.strip("/")
        return f"{base}/{size}/{file_path.lstrip('/')}"

    async def list_candidates(
        self, client: httpx.AsyncClient, provider_id: str
    ) -> list[ImageCandidate]:
        """Fetch the images listing for *provider_id* and select candidates."""
        url = f"{self.settings.TMDB_BASE_URL}/movie/{provider_id}/images"
        listing = await get_json(client, url, provider=PROVIDER, params=self._params)
        if not isinstance(listing, dict):
            raise ProviderError(PROVIDER, "images response is not a JSON object")
        return select_image_candidates(listing)

    async def fetch_images(self, title: str) -> ImageBundle:
        """Resolve, select and download artwork for *title*.

        Raises:
            NotFoundError: If the search has no results.
            NoImagesError: If the listing has no posters or backdrops.
            ProviderError: On any transport/parse failure or failed download.
        """
        async with open_client(self._client, self.settings.REQUEST_TIMEOUT) as client:
            provider_id = await resolve_first_id(
                client,
                f"{self.settings.TMDB_BASE_URL}/search/movie",
                title,
                provider=PROVIDER,
                params=self._params,
            )

            candidates = await self.list_candidates(client, provider_id)
            if not candidates:
                raise NoImagesError(title)

            # Every download settles before the client closes; the first failure wins.
            downloads = await asyncio.gather(
                *(
                    get_bytes(client, self.image_url(c.file_path), provider=PROVIDER)
                    for c in candidates
                ),
                return_exceptions=True,
            )
        failures = [d for d in downloads if isinstance(d, BaseException)]
        if failures:
            raise failures[0]
        contents = [d for d in downloads if isinstance(d, bytes)]

        images_root = self.images_dir or get_images_dir()
        try:
            paths = write_image_bundle(images_root, title, contents)
        except OSError as exc:
            raise ProviderError(PROVIDER, exc) from exc
        logger.info(f"Downloaded {len(paths)} image(s) for {title!r}")
        return ImageBundle(paths=paths, candidates=candidates)
