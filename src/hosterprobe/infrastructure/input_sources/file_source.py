"""File input source: YAML, JSON or CSV links files.

Accepted YAML/JSON shapes:

    - link: https://...        # a plain list of records
      title: ...

    link_field: url            # or a mapping naming the URL attribute
    links:
      - url: https://...

Bare strings in a list are wrapped as ``{link_field: value}``.  CSV files
are read with ``csv.DictReader``; the header row names the attributes.
"""

from __future__ import annotations

import asyncio
import csv
import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import structlog
import yaml

from hosterprobe.domain.entities import LinkBatch
from hosterprobe.domain.exceptions import InputSourceError

log = structlog.get_logger(__name__)

_CSV_SUFFIXES = frozenset({".csv"})
_JSON_SUFFIXES = frozenset({".json"})


def _coerce_records(
    items: Any, link_field: str, path: Path
) -> list[Mapping[str, Any]]:
    if not isinstance(items, list):
        raise InputSourceError(
            f"{path}: expected a list of links, got {type(items).__name__}"
        )
    records: list[Mapping[str, Any]] = []
    for index, item in enumerate(items):
        if isinstance(item, str):
            records.append({link_field: item})
        elif isinstance(item, Mapping):
            records.append(dict(item))
        else:
            raise InputSourceError(
                f"{path}: entry {index} must be a mapping or a URL string"
            )
    return records


def parse_document(data: Any, link_field: str, path: Path) -> LinkBatch:
    """Turn a parsed YAML/JSON document into a batch."""
    if data is None:
        return LinkBatch(link_field=link_field, records=[])
    if isinstance(data, Mapping):
        link_field = str(data.get("link_field") or link_field)
        items = data.get("links", [])
    else:
        items = data
    return LinkBatch(
        link_field=link_field, records=_coerce_records(items, link_field, path)
    )


class FileInputSource:
    """Reads the whole links file once per call."""

    def __init__(self, path: Path, *, link_field: str = "link") -> None:
        self._path = path
        self._link_field = link_field

    @property
    def name(self) -> str:
        return "file"

    async def get_download_links(self) -> LinkBatch:
        """Read and parse the file (sync disk I/O -> to_thread)."""
        batch = await asyncio.to_thread(self._read)
        log.debug("input_file_read", path=str(self._path), links=len(batch))
        return batch

    def _read(self) -> LinkBatch:
        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise InputSourceError(
                f"Cannot read links file {self._path}: {exc}"
            ) from exc

        suffix = self._path.suffix.lower()
        if suffix in _CSV_SUFFIXES:
            try:
                rows = list(csv.DictReader(text.splitlines()))
            except csv.Error as exc:
                raise InputSourceError(f"{self._path}: invalid CSV: {exc}") from exc
            return LinkBatch(link_field=self._link_field, records=rows)

        try:
            if suffix in _JSON_SUFFIXES:
                data = json.loads(text)
            else:
                data = yaml.safe_load(text)
        except (ValueError, yaml.YAMLError) as exc:
            raise InputSourceError(f"{self._path}: cannot parse links: {exc}") from exc
        return parse_document(data, self._link_field, self._path)
