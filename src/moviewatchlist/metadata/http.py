"""HTTP helpers shared by all provider clients.

Each helper performs exactly one request (no retries) and converts every
transport, status or decoding failure into a :class:`ProviderError` tagged with
the provider name, chaining the original httpx exception.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import httpx

from moviewatchlist.errors import ProviderError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def open_client(
    client: httpx.AsyncClient | None, timeout: float
) -> AsyncIterator[httpx.AsyncClient]:
    """Yield *client* if given, otherwise a short-lived client with *timeout*."""
    if client is not None:
        yield client
        return
    async with httpx.AsyncClient(timeout=timeout) as owned:
        yield owned


async def get_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    provider: str,
    params: dict[str, Any] | None = None,
) -> Any:
    """GET *url* and return the decoded JSON body.

    Raises:
        ProviderError: On connection errors, timeouts, non-2xx responses or a
            body that is not valid JSON.
    """
    try:
        resp = await client.get(url, params=params)
        resp.raise_for_status()
        return resp.json()
    except httpx.HTTPError as exc:
        logger.debug(f"{provider}: GET {url} failed: {exc!r}")
        raise ProviderError(provider, exc) from exc
    except ValueError as exc:
        logger.debug(f"{provider}: GET {url} returned invalid JSON")
        raise ProviderError(provider, exc) from exc


async def get_bytes(client: httpx.AsyncClient, url: str, *, provider: str) -> bytes:
    """GET *url* and return the raw response body.

    Raises:
        ProviderError: On connection errors, timeouts or non-2xx responses.
    """
    try:
        resp = await client.get(url)
        resp.raise_for_status()
    except httpx.HTTPError as exc:
        logger.debug(f"{provider}: download {url} failed: {exc!r}")
        raise ProviderError(provider, exc) from exc
    return resp.content
