"""OMDb client: the watchlist's metadata provider.

Looks a movie up by exact title (``t=``) and returns its canonical title,
director, release year and genre. A single request per call, no retries.
"""

import logging

import httpx

from moviewatchlist.errors import NotFoundError, ProviderError
from moviewatchlist.metadata.base import MetadataProvider
from moviewatchlist.metadata.http import get_json, open_client
from moviewatchlist.metadata.models import MovieMetadata
from moviewatchlist.metadata.settings import Settings
from moviewatchlist.metadata.utils import query_title

logger = logging.getLogger(__name__)

PROVIDER = "omdb"
REQUIRED_FIELDS = ("Title", "Director", "Year", "Genre")


class OMDbClient(MetadataProvider):
    """Metadata provider backed by the OMDb API."""

    name = PROVIDER

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize OMDb client.

        Args:
            settings: Provider settings; loaded from the environment if omitted.
            client: Shared HTTP client. When omitted a client is opened per call.
        """
        self.settings = settings or Settings()
        self._client = client

    def build_url(self, title: str) -> str:
        """Return the lookup URL for *title* (spaces sent as ``+``)."""
        base = self.settings.OMDB_BASE_URL
        api_key = query_title(self.settings.OMDB_API_KEY or "")
        return f"{base}?t={query_title(title)}&apikey={api_key}"

    async def fetch_metadata(self, title: str) -> MovieMetadata:
        """Fetch director, year, genre and canonical title for *title*.

        Raises:
            NotFoundError: If OMDb answers with an ``Error`` field.
            ProviderError: On transport failure, non-2xx status, invalid JSON or
                a response missing one of the expected fields.
        """
        async with open_client(self._client, self.settings.REQUEST_TIMEOUT) as client:
            data = await get_json(client, self.build_url(title), provider=PROVIDER)

        if not isinstance(data, dict):
            raise ProviderError(PROVIDER, "response is not a JSON object")
        if "Error" in data:
            logger.info(f"OMDb has no match for {title!r}: {data['Error']}")
            raise NotFoundError(title, provider=PROVIDER)

        missing = [key for key in REQUIRED_FIELDS if not isinstance(data.get(key), str)]
        if missing:
            raise ProviderError(PROVIDER, f"response missing {', '.join(missing)}")

        try:
            return MovieMetadata(
                title=data["Title"],
                director=data["Director"],
                release_year=data["Year"],
                genre=data["Genre"],
                provider=PROVIDER,
            )
        except ValueError as exc:
            raise ProviderError(PROVIDER, exc) from exc
