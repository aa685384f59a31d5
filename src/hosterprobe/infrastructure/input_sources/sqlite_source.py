"""SQLite input source: one row of a configured query per link."""

from __future__ import annotations

import asyncio
import sqlite3
from pathlib import Path

import structlog

from hosterprobe.domain.entities import LinkBatch
from hosterprobe.domain.exceptions import InputSourceError

log = structlog.get_logger(__name__)


class SqliteInputSource:
    """Runs ``query`` against the database at ``path``, read-only."""

    def __init__(self, path: Path, query: str, *, link_field: str = "link") -> None:
        self._path = path
        self._query = query
        self._link_field = link_field

    @property
    def name(self) -> str:
        return "sqlite"

    async def get_download_links(self) -> LinkBatch:
        batch = await asyncio.to_thread(self._read)
        log.debug("input_sqlite_read", path=str(self._path), links=len(batch))
        return batch

    def _read(self) -> LinkBatch:
        if not self._path.exists():
            raise InputSourceError(f"SQLite database not found: {self._path}")
        uri = f"{self._path.resolve().as_uri()}?mode=ro"
        try:
            conn = sqlite3.connect(uri, uri=True, timeout=30.0)
        except sqlite3.Error as exc:
            raise InputSourceError(f"Cannot open {self._path}: {exc}") from exc
        try:
            conn.row_factory = sqlite3.Row
            rows = conn.execute(self._query).fetchall()
        except sqlite3.Error as exc:
            raise InputSourceError(f"Query failed on {self._path}: {exc}") from exc
        finally:
            conn.close()

        records = [dict(row) for row in rows]
        if records and self._link_field not in records[0]:
            raise InputSourceError(
                f"Query result has no column {self._link_field!r}"
            )
        return LinkBatch(link_field=self._link_field, records=records)
