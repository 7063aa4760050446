"""Tests for the OMDbClient metadata provider.

Covers expected, edge, and failure cases for exact-title lookups.
"""

import httpx
import pytest
import respx

from moviewatchlist.errors import NotFoundError, ProviderError
from moviewatchlist.metadata.clients.omdb import OMDbClient
from moviewatchlist.metadata.settings import Settings

MATRIX = {
    "Title": "The Matrix",
    "Year": "1999",
    "Director": "Lana Wachowski, Lilly Wachowski",
    "Genre": "Action, Sci-Fi",
    "Response": "True",
}


@pytest.mark.asyncio
class TestOMDbClient:
    """Tests for OMDbClient covering expected, edge, and failure cases."""

    async def test_fetch_metadata_expected(
        self, respx_mock: respx.MockRouter, settings: Settings
    ) -> None:
        """Expected: a known title yields canonical metadata."""
        route = respx_mock.get(host="www.omdbapi.com", path="/").mock(
            return_value=httpx.Response(200, json=MATRIX)
        )
        metadata = await OMDbClient(settings).fetch_metadata("the matrix")
        assert metadata.title == "The Matrix"
        assert metadata.director == "Lana Wachowski, Lilly Wachowski"
        assert metadata.release_year == "1999"
        assert metadata.genre == "Action, Sci-Fi"
        assert metadata.provider == "omdb"
        assert route.call_count == 1

    async def test_title_sent_with_plus_for_spaces(
        self, respx_mock: respx.MockRouter, settings: Settings
    ) -> None:
        """Edge: spaces are encoded as '+' and casing is kept verbatim."""
        route = respx_mock.get(host="www.omdbapi.com", path="/").mock(
            return_value=httpx.Response(200, json=MATRIX)
        )
        await OMDbClient(settings).fetch_metadata("The Matrix")
        url = str(route.calls.last.request.url)
        assert "t=The+Matrix" in url
        assert "apikey=omdb-key" in url

    async def test_error_field_is_not_found(
        self, respx_mock: respx.MockRouter, settings: Settings
    ) -> None:
        """Failure: an 'Error' field in the response means the title is unknown."""
        respx_mock.get(host="www.omdbapi.com", path="/").mock(
            return_value=httpx.Response(
                200, json={"Response": "False", "Error": "Movie not found!"}
            )
        )
        with pytest.raises(NotFoundError) as excinfo:
            await OMDbClient(settings).fetch_metadata("Nope Nope")
        assert excinfo.value.provider == "omdb"
        assert excinfo.value.subject == "Nope Nope"

    async def test_missing_field_is_provider_error(
        self, respx_mock: respx.MockRouter, settings: Settings
    ) -> None:
        """Failure: a response without Director is a parse failure."""
        partial = {k: v for k, v in MATRIX.items() if k != "Director"}
        respx_mock.get(host="www.omdbapi.com", path="/").mock(
            return_value=httpx.Response(200, json=partial)
        )
        with pytest.raises(ProviderError, match="Director"):
            await OMDbClient(settings).fetch_metadata("The Matrix")

    async def test_server_error_is_provider_error(
        self, respx_mock: respx.MockRouter, settings: Settings
    ) -> None:
        """Failure: a 500 response is wrapped as a ProviderError."""
        respx_mock.get(host="www.omdbapi.com", path="/").mock(
            return_value=httpx.Response(500)
        )
        with pytest.raises(ProviderError) as excinfo:
            await OMDbClient(settings).fetch_metadata("The Matrix")
        assert excinfo.value.provider == "omdb"
        assert isinstance(excinfo.value.cause, httpx.HTTPStatusError)

    async def test_invalid_json_is_provider_error(
        self, respx_mock: respx.MockRouter, settings: Settings
    ) -> None:
        """Failure: a non-JSON body is wrapped as a ProviderError."""
        respx_mock.get(host="www.omdbapi.com", path="/").mock(
            return_value=httpx.Response(200, text="<html>oops</html>")
        )
        with pytest.raises(ProviderError):
            await OMDbClient(settings).fetch_metadata("The Matrix")

    async def test_timeout_is_provider_error(
        self, respx_mock: respx.MockRouter, settings: Settings
    ) -> None:
        """Failure: a timeout is reported, not retried."""
        route = respx_mock.get(host="www.omdbapi.com", path="/").mock(
            side_effect=httpx.ReadTimeout("timed out")
        )
        with pytest.raises(ProviderError):
            await OMDbClient(settings).fetch_metadata("The Matrix")
        assert route.call_count == 1

    async def test_uses_shared_client(
        self, respx_mock: respx.MockRouter, settings: Settings
    ) -> None:
        """Expected: an injected client is used and left open."""
        respx_mock.get(host="www.omdbapi.com", path="/").mock(
            return_value=httpx.Response(200, json=MATRIX)
        )
        async with httpx.AsyncClient() as shared:
            await OMDbClient(settings, client=shared).fetch_metadata("The Matrix")
            assert not shared.is_closed


def test_build_url_escapes_reserved_characters(settings: Settings) -> None:
    """Edge: '&' in a title cannot split the query string."""
    url = OMDbClient(settings).build_url("Fast & Furious")
    assert url == "https://www.omdbapi.com/?t=Fast+%26+Furious&apikey=omdb-key"
