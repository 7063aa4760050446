"""Utility functions for title handling.

- query_title prepares a user title for the OMDb ``t=`` parameter.
- safe_title turns a title into the directory name used for its artwork.
- select_image_candidates applies the poster-then-backdrop selection rule to an
  images listing.
"""

import re
from typing import Any
from urllib.parse import quote_plus

from moviewatchlist.metadata.models import MAX_BUNDLE_IMAGES, ImageCandidate, ImageKind

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9]")


def query_title(title: str) -> str:
    """Encode *title* for a query string, with spaces sent as ``+``.

    Casing and wording are kept verbatim; reserved characters such as ``&``
    are percent-escaped so they cannot split the query.
    """
    return quote_plus(title)


def safe_title(title: str) -> str:
    """Return a filesystem-safe form of *title*.

    Every character outside ``[A-Za-z0-9]`` becomes ``_``. Distinct titles may
    map to the same name ("Alien!" and "Alien?").
    """
    return _UNSAFE_CHARS.sub("_", title)


def select_image_candidates(
    listing: dict[str, Any], limit: int = MAX_BUNDLE_IMAGES
) -> list[ImageCandidate]:
    """Pick up to *limit* artwork paths from a TMDB images listing.

    Posters are taken first, in response order. Remaining slots are filled
    from backdrops, also in response order. Entries without a string
    ``file_path`` are ignored.

    Args:
        listing: Parsed JSON of ``/movie/{id}/images``.
        limit: Maximum number of candidates to return.

    Returns:
        The selected candidates, possibly empty.
    """
    selected: list[ImageCandidate] = []
    for key, kind in (("posters", ImageKind.POSTER), ("backdrops", ImageKind.BACKDROP)):
        for entry in listing.get(key) or []:
            if len(selected) >= limit:
                return selected
            file_path = entry.get("file_path") if isinstance(entry, dict) else None
            if isinstance(file_path, str) and file_path:
                selected.append(ImageCandidate(file_path=file_path, kind=kind))
    return selected
