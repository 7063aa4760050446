# WARNING: This settings loader is for LOCAL DEVELOPMENT ONLY.
# Never commit your .env file or share your API keys.
# Ensure .env is listed in .gitignore!

"""Settings loader for metadata provider API keys and endpoints.

Loads OMDb and TMDB credentials from environment variables or .env file.

Required .env keys:
- OMDB_API_KEY (metadata lookups)
- TMDB_API_KEY (artwork and similar-movie lookups)

Optional overrides:
- OMDB_BASE_URL, TMDB_BASE_URL, TMDB_IMAGE_BASE_URL, TMDB_IMAGE_SIZE
- REQUEST_TIMEOUT (seconds, applied to every provider call)
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from moviewatchlist.errors import MovieWatchlistError


class MissingAPIKeyError(MovieWatchlistError):
    """Raised when a required API key is missing from the environment or .env file."""

    def __init__(self, key: str) -> None:
        """Initialize the error with the missing key name."""
        super().__init__(
            f"Missing required API key: {key}\n"
            "Set it in the environment or in a .env file in the working directory."
        )
        self.key = key


class Settings(BaseSettings):
    """Settings for metadata provider API keys and endpoints.

    Loads OMDb and TMDB credentials from environment variables or .env file.
    """

    OMDB_API_KEY: str | None = None
    TMDB_API_KEY: str | None = None
    OMDB_BASE_URL: str = "https://www.omdbapi.com/"
    TMDB_BASE_URL: str = "https://api.themoviedb.org/3"
    TMDB_IMAGE_BASE_URL: str = "https://image.tmdb.org/t/p/"
    TMDB_IMAGE_SIZE: str = "w780"
    REQUEST_TIMEOUT: float = 30.0

    model_config = SettingsConfigDict(extra="allow", env_file=".env")

    def require_keys(self, *keys: str) -> None:
        """Raise MissingAPIKeyError if any required key is missing.

        Args:
            keys: Key names to check. Defaults to both provider keys.
        """
        required = keys or ("OMDB_API_KEY", "TMDB_API_KEY")
        for key in required:
            if not getattr(self, key, None):
                raise MissingAPIKeyError(key)
