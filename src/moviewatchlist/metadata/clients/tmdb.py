"""TMDB similarity client: the watchlist's similar-movies provider.

Performs a sequential two-hop lookup: the title is resolved to a TMDB id with
the shared first-hit search, then ``/movie/{id}/similar`` is reduced to a list
of titles in the order TMDB returns them. Nothing is cached between calls.
"""

import logging

import httpx

from moviewatchlist.errors import ProviderError
from moviewatchlist.metadata.base import SimilarityProvider
from moviewatchlist.metadata.http import get_json, open_client
from moviewatchlist.metadata.resolver import resolve_first_id
from moviewatchlist.metadata.settings import Settings

logger = logging.getLogger(__name__)

PROVIDER = "tmdb"


class TMDBClient(SimilarityProvider):
    """Similarity provider backed by TMDB."""

    name = PROVIDER

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize TMDBClient.

        Args:
            settings: Provider settings; loaded from the environment if omitted.
            client: Shared HTTP client. When omitted a client is opened per call.
        """
        self.settings = settings or Settings()
        self._client = client

    @property
    def _params(self) -> dict[str, str]:
        return {"api_key": self.settings.TMDB_API_KEY or ""}

    async def resolve_id(self, client: httpx.AsyncClient, title: str) -> str:
        """First hop: resolve *title* to a TMDB movie id."""
        return await resolve_first_id(
            client,
            f"{self.settings.TMDB_BASE_URL}/search/movie",
            title,
            provider=PROVIDER,
            params=self._params,
        )

    async def list_similar(self, client: httpx.AsyncClient, provider_id: str) -> list[str]:
        """Second hop: list the titles TMDB considers similar to *provider_id*.

        An empty listing is a valid answer and yields an empty list.
        """
        url = f"{self.settings.TMDB_BASE_URL}/movie/{provider_id}/similar"
        data = await get_json(client, url, provider=PROVIDER, params=self._params)
        if not isinstance(data, dict):
            raise ProviderError(PROVIDER, "similar response is not a JSON object")
        titles: list[str] = []
        for item in data.get("results") or []:
            title = item.get("title") if isinstance(item, dict) else None
            if not isinstance(title, str):
                raise ProviderError(PROVIDER, "similar result has no title")
            titles.append(title)
        return titles

    async def fetch_similar(self, title: str) -> list[str]:
        """Return titles similar to *title*, in provider order.

        Raises:
            NotFoundError: If the search step has no results.
            ProviderError: On transport or parse failure in either hop.
        """
        async with open_client(self._client, self.settings.REQUEST_TIMEOUT) as client:
            provider_id = await self.resolve_id(client, title)
            titles = await self.list_similar(client, provider_id)
        logger.debug(f"TMDB similar for {title!r} ({provider_id}): {len(titles)} title(s)")
        return titles
