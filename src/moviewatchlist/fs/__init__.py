"""Filesystem operations for moviewatchlist."""

from moviewatchlist.fs.storage import (
    get_default_db_path,
    get_images_dir,
    get_watchlist_dir,
    title_image_dir,
    write_image_bundle,
)

__all__ = [
    "get_watchlist_dir",
    "get_images_dir",
    "get_default_db_path",
    "title_image_dir",
    "write_image_bundle",
]
