"""JSON serialization helpers for CLI output.

Handles the types that appear in watchlist records and image bundles but are
not natively supported by the standard library encoder.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Self

from pydantic import BaseModel


class WatchlistEncoder(json.JSONEncoder):
    """JSON encoder for pydantic models, Path and datetime objects."""

    def default(self: Self, obj: object) -> Any:  # noqa: ANN401
        """Convert objects to a JSON-serializable form.

        - BaseModel: its JSON-mode ``model_dump``
        - Path: string
        - datetime: ISO 8601 string
        """
        if isinstance(obj, BaseModel):
            return obj.model_dump(mode="json")
        if isinstance(obj, Path):
            return str(obj)
        if isinstance(obj, datetime):
            return obj.isoformat()
        return super().default(obj)


def dumps(obj: object) -> str:
    """Serialize *obj* with :class:`WatchlistEncoder`, indented for terminals."""
    return json.dumps(obj, cls=WatchlistEncoder, indent=2)
