"""Error taxonomy for the watchlist enrichment pipeline.

Every failure surfaced by a provider client, the aggregator or the watchlist
service is a subclass of :class:`MovieWatchlistError`, so callers (the CLI, or
any web layer wrapped around :class:`~moviewatchlist.core.watchlist.WatchlistService`)
can catch a single base class and still branch on the concrete type.

- NotFoundError: a title or record id could not be resolved.
- NoImagesError: the image provider knows the title but has no usable artwork.
- ProviderError: transport or parse failure against an external service.
- ValidationError: caller input rejected before any work is done.
"""


class MovieWatchlistError(Exception):
    """Base class for all moviewatchlist errors."""


class NotFoundError(MovieWatchlistError):
    """Raised when a title or id cannot be resolved by a provider or the store."""

    def __init__(self, subject: object, provider: str | None = None) -> None:
        """Initialize the error with the unresolved subject.

        Args:
            subject: The title or id that could not be found.
            provider: Optional name of the provider that reported the miss.
        """
        where = f" ({provider})" if provider else ""
        super().__init__(f"Not found{where}: {subject}")
        self.subject = subject
        self.provider = provider


class NoImagesError(MovieWatchlistError):
    """Raised when a resolved title has neither posters nor backdrops."""

    def __init__(self, title: str) -> None:
        """Initialize the error with the title that had no artwork."""
        super().__init__(f"No images available for: {title}")
        self.title = title


class ProviderError(MovieWatchlistError):
    """Raised on transport or parse failure against an external provider."""

    def __init__(self, provider: str, cause: BaseException | str) -> None:
        """Initialize the error.

        Args:
            provider: Short provider name (e.g. ``"omdb"``, ``"tmdb"``).
            cause: The underlying exception, or a message when there is none.
        """
        super().__init__(f"{provider} request failed: {cause}")
        self.provider = provider
        self.cause = cause


class ValidationError(MovieWatchlistError):
    """Raised when caller input is rejected (blank title, rating out of range)."""
