"""Filesystem storage for moviewatchlist.

This module owns the on-disk layout used by the watchlist:

- ``~/.moviewatchlist/`` is the application directory (database and images).
- Artwork for a title lives under ``<images_dir>/<safe_title>/`` and files are
  named positionally: ``image1.jpg``, ``image2.jpg``, ``image3.jpg``.

Design:
- Directory creation is idempotent; an existing title directory is reused, its
  files overwritten, and positional files beyond the new bundle removed.
- Bundles are written only after every image has been downloaded, so a failed
  download never leaves a partially updated directory behind.
- Deleting a movie does not clean up its artwork.
"""

import logging
import os
from collections.abc import Sequence
from pathlib import Path

from moviewatchlist.metadata.models import MAX_BUNDLE_IMAGES
from moviewatchlist.metadata.utils import safe_title

logger = logging.getLogger(__name__)

IMAGE_FILENAME = "image{index}.jpg"


def get_watchlist_dir() -> Path:
    """Get the ~/.moviewatchlist directory, creating it if it doesn't exist.

    HOME is read from the environment first so tests can redirect it.
    """
    home = Path(os.environ.get("HOME") or Path.home())
    app_dir = home / ".moviewatchlist"
    app_dir.mkdir(parents=True, exist_ok=True)
    return app_dir


def get_images_dir() -> Path:
    """Get the default artwork root, ``~/.moviewatchlist/images``."""
    images_dir = get_watchlist_dir() / "images"
    images_dir.mkdir(exist_ok=True)
    return images_dir


def get_default_db_path() -> Path:
    """Get the default watchlist database path."""
    return get_watchlist_dir() / "watchlist.db"


def title_image_dir(images_root: Path, title: str) -> Path:
    """Return (and create) the artwork directory for *title*."""
    target = images_root / safe_title(title)
    target.mkdir(parents=True, exist_ok=True)
    return target


def write_image_bundle(
    images_root: Path, title: str, images: Sequence[bytes]
) -> list[Path]:
    """Write downloaded image bytes for *title* and return their absolute paths.

    Args:
        images_root: Root directory that holds one subdirectory per title.
        title: The title the images belong to (sanitised for the directory name).
        images: Raw image bodies in bundle order.

    Returns:
        Absolute paths, ``image1.jpg`` first. Older ``imageN.jpg`` files past
        the end of this bundle are deleted.
    """
    target = title_image_dir(images_root, title)
    paths: list[Path] = []
    for index, content in enumerate(images, start=1):
        path = (target / IMAGE_FILENAME.format(index=index)).resolve()
        path.write_bytes(content)
        paths.append(path)
    for index in range(len(paths) + 1, MAX_BUNDLE_IMAGES + 1):
        (target / IMAGE_FILENAME.format(index=index)).unlink(missing_ok=True)
    logger.debug(f"Wrote {len(paths)} image(s) to {target}")
    return paths
