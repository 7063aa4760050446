"""Client implementations for the watchlist's external providers."""

from moviewatchlist.metadata.clients.omdb import OMDbClient
from moviewatchlist.metadata.clients.tmdb import TMDBClient
from moviewatchlist.metadata.clients.tmdb_images import TMDBImageClient

__all__ = ["OMDbClient", "TMDBClient", "TMDBImageClient"]
