"""Durable storage for watchlist records.

The watchlist service talks to storage only through the narrow
:class:`WatchlistStore` contract (save, get, page, update, delete). The default
implementation keeps records in a SQLite file; every call opens its own
connection inside ``asyncio.to_thread`` so the event loop is never blocked and
no connection is shared between concurrent requests.
"""

import asyncio
import logging
import sqlite3
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from moviewatchlist.errors import NotFoundError
from moviewatchlist.models.core import MovieRecord, Page

logger = logging.getLogger(__name__)

CREATE_TABLE_SQL = """
    CREATE TABLE IF NOT EXISTS movies (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        title TEXT NOT NULL,
        director TEXT NOT NULL,
        release_year TEXT NOT NULL,
        genre TEXT NOT NULL,
        watched INTEGER NOT NULL DEFAULT 0,
        rating INTEGER NOT NULL DEFAULT 0,
        image_path TEXT NOT NULL
    );
    """

_COLUMNS = "id, title, director, release_year, genre, watched, rating, image_path"


class WatchlistStore(ABC):
    """Abstract keyed storage for :class:`MovieRecord` objects."""

    @abstractmethod
    async def save(self, record: MovieRecord) -> MovieRecord:
        """Persist a new record and return it with its assigned id."""
        raise NotImplementedError

    @abstractmethod
    async def get(self, record_id: int) -> Optional[MovieRecord]:
        """Return the record with *record_id*, or None if absent."""
        raise NotImplementedError

    @abstractmethod
    async def page(self, page: int, size: int) -> Page[MovieRecord]:
        """Return one zero-based page of records ordered by id."""
        raise NotImplementedError

    @abstractmethod
    async def update(self, record: MovieRecord) -> MovieRecord:
        """Write the mutable fields (watched, rating) of an existing record."""
        raise NotImplementedError

    @abstractmethod
    async def delete(self, record_id: int) -> bool:
        """Delete a record; return False if it did not exist."""
        raise NotImplementedError


def _row_to_record(row: tuple) -> MovieRecord:
    record_id, title, director, release_year, genre, watched, rating, image_path = row
    return MovieRecord(
        id=record_id,
        title=title,
        director=director,
        release_year=release_year,
        genre=genre,
        watched=bool(watched),
        rating=rating,
        image_path=image_path,
    )


class SQLiteWatchlistStore(WatchlistStore):
    """SQLite-backed :class:`WatchlistStore`."""

    def __init__(self, db_path: Path | str) -> None:
        """Initialize the store.

        Args:
            db_path: Database file; parent directories are created on first use.
        """
        self.db_path = Path(db_path)

    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path)
        conn.execute(CREATE_TABLE_SQL)
        return conn

    async def save(self, record: MovieRecord) -> MovieRecord:
        def db_logic() -> int:
            conn = self._connect()
            try:
                cursor = conn.execute(
                    "INSERT INTO movies "
                    "(title, director, release_year, genre, watched, rating, image_path) "
                    "VALUES (?, ?, ?, ?, ?, ?, ?)",
                    (
                        record.title,
                        record.director,
                        record.release_year,
                        record.genre,
                        int(record.watched),
                        record.rating,
                        record.image_path,
                    ),
                )
                conn.commit()
                return int(cursor.lastrowid)
            finally:
                conn.close()

        record_id = await asyncio.to_thread(db_logic)
        logger.debug(f"Saved {record.title!r} as id {record_id}")
        return record.model_copy(update={"id": record_id})

    async def get(self, record_id: int) -> Optional[MovieRecord]:
        def db_logic() -> Optional[tuple]:
            conn = self._connect()
            try:
                return conn.execute(
                    f"SELECT {_COLUMNS} FROM movies WHERE id=?", (record_id,)
                ).fetchone()
            finally:
                conn.close()

        row = await asyncio.to_thread(db_logic)
        return _row_to_record(row) if row else None

    async def page(self, page: int, size: int) -> Page[MovieRecord]:
        def db_logic() -> tuple[list[tuple], int]:
            conn = self._connect()
            try:
                rows = conn.execute(
                    f"SELECT {_COLUMNS} FROM movies ORDER BY id LIMIT ? OFFSET ?",
                    (size, page * size),
                ).fetchall()
                (total,) = conn.execute("SELECT COUNT(*) FROM movies").fetchone()
                return rows, total
            finally:
                conn.close()

        rows, total = await asyncio.to_thread(db_logic)
        return Page[MovieRecord](
            items=[_row_to_record(row) for row in rows],
            page=page,
            size=size,
            total=total,
        )

    async def update(self, record: MovieRecord) -> MovieRecord:
        if record.id is None:
            raise ValueError("Cannot update a record that has not been saved")

        def db_logic() -> int:
            conn = self._connect()
            try:
                # Only the user-owned fields are writable after creation.
                cursor = conn.execute(
                    "UPDATE movies SET watched=?, rating=? WHERE id=?",
                    (int(record.watched), record.rating, record.id),
                )
                conn.commit()
                return cursor.rowcount
            finally:
                conn.close()

        updated = await asyncio.to_thread(db_logic)
        if not updated:
            raise NotFoundError(record.id)
        return record

    async def delete(self, record_id: int) -> bool:
        def db_logic() -> int:
            conn = self._connect()
            try:
                cursor = conn.execute("DELETE FROM movies WHERE id=?", (record_id,))
                conn.commit()
                return cursor.rowcount
            finally:
                conn.close()

        return bool(await asyncio.to_thread(db_logic))
