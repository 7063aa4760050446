"""Persistent user preferences for moviewatchlist.

Preferences live in ``$XDG_CONFIG_HOME/moviewatchlist/config.toml`` (falling
back to ``~/.config``), read with tomli and written with tomli-w. Every key can
be overridden from the environment as ``MOVIEWATCHLIST_<SECTION>_<NAME>``.

Known keys:
- ``storage.db_path``: watchlist database file.
- ``storage.images_dir``: artwork root directory.
- ``list.page_size``: default page size for ``moviewatchlist list``.
"""

import contextlib
import os
from pathlib import Path
from typing import Any, TypeVar, cast

import tomli
import tomli_w

CONFIG_DIR = (
    Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config") / "moviewatchlist"
)
CONFIG_FILE = CONFIG_DIR / "config.toml"
ENV_PREFIX = "MOVIEWATCHLIST_"

DEFAULT_PAGE_SIZE = 10

T = TypeVar("T")


def load_config() -> dict[str, Any]:
    """Return the parsed config file, or an empty mapping when there is none."""
    try:
        with CONFIG_FILE.open("rb") as fh:
            return tomli.load(fh)
    except FileNotFoundError:
        return {}


def set_config_value(dotted_key: str, value: Any) -> None:
    """Persist *value* under *dotted_key* (e.g. ``"list.page_size"``).

    Other keys already in the file are preserved.
    """
    data = load_config()
    *sections, name = dotted_key.split(".")
    table = data
    for section in sections:
        table = table.setdefault(section, {})
    table[name] = value
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(tomli_w.dumps(data), encoding="utf-8")


def env_var_for(dotted_key: str) -> str:
    """``"storage.db_path"`` -> ``"MOVIEWATCHLIST_STORAGE_DB_PATH"``."""
    return ENV_PREFIX + dotted_key.upper().replace(".", "_")


def _config_value(data: dict[str, Any], dotted_key: str) -> Any | None:
    node: Any = data
    for part in dotted_key.split("."):
        try:
            node = node[part]
        except (KeyError, TypeError):
            return None
    return node


def _coerce(raw: Any, default: T) -> T:
    """Convert *raw* to the type of *default*; unusable values give *default*."""
    if isinstance(default, bool):
        if isinstance(raw, str):
            return cast(T, raw.strip().lower() in {"1", "true", "yes", "on"})
        return cast(T, raw) if isinstance(raw, bool) else default
    if isinstance(default, (int, float)):
        if isinstance(raw, bool):
            return default
        number_type = type(default)
        with contextlib.suppress(TypeError, ValueError):
            return cast(T, number_type(raw))
        return default
    if isinstance(default, Path):
        return cast(T, Path(str(raw)).expanduser())
    return cast(T, raw)


def resolve_setting(key: str, *, default: T, cli_value: T | None = None) -> T:
    """Resolve *key* with precedence CLI option > env var > config file > default.

    Args:
        key: Dotted key path, e.g. ``"storage.db_path"``.
        default: Fallback value; its type drives coercion of env/file values.
        cli_value: Value given on the command line, or None when absent.

    Returns:
        The resolved value, of the same type as *default*.
    """
    if cli_value is not None:
        return cli_value
    raw = os.environ.get(env_var_for(key))
    if raw is None:
        raw = _config_value(load_config(), key)
    return default if raw is None else _coerce(raw, default)


def get_default_page_size() -> int:
    """Return the configured default page size."""
    return resolve_setting("list.page_size", default=DEFAULT_PAGE_SIZE)


def set_default_page_size(size: int) -> None:
    """Persist the default page size used by ``moviewatchlist list``."""
    set_config_value("list.page_size", size)
