"""First-hit identifier resolution.

Both the image client and the similarity client need to turn a human title
into a provider-internal id before their second request. The rule is the same
for both: query the provider's search endpoint and take the first result,
with no disambiguation. This module is the single implementation of that rule,
parameterised by the search endpoint.
"""

import logging
from typing import Any

import httpx

from moviewatchlist.errors import NotFoundError, ProviderError
from moviewatchlist.metadata.http import get_json

logger = logging.getLogger(__name__)


async def resolve_first_id(
    client: httpx.AsyncClient,
    search_url: str,
    title: str,
    *,
    provider: str,
    params: dict[str, Any] | None = None,
    query_param: str = "query",
) -> str:
    """Resolve *title* to the id of the first search result.

    Args:
        client: HTTP client used for the request.
        search_url: Full URL of the provider's search endpoint.
        title: The title to search for, sent verbatim.
        provider: Provider name used in errors and logs.
        params: Extra query parameters (API key, language, etc.).
        query_param: Name of the search-term parameter.

    Returns:
        The id of the first result, as a string.

    Raises:
        NotFoundError: If the search returns zero results.
        ProviderError: On transport failure or a malformed response.
    """
    query = {query_param: title, **(params or {})}
    data = await get_json(client, search_url, provider=provider, params=query)
    if not isinstance(data, dict):
        raise ProviderError(provider, "search response is not a JSON object")
    results = data.get("results") or []
    if not isinstance(results, list):
        raise ProviderError(provider, "search results are not a list")
    if not results:
        raise NotFoundError(title, provider=provider)
    first = results[0]
    if not isinstance(first, dict) or first.get("id") is None:
        raise ProviderError(provider, "first search result has no id")
    provider_id = str(first["id"])
    logger.debug(f"{provider}: resolved {title!r} -> {provider_id}")
    return provider_id
