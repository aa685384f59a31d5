"""In-memory input source for URLs given on the command line."""

from __future__ import annotations

from collections.abc import Iterable

from hosterprobe.domain.entities import LinkBatch


class StaticInputSource:
    def __init__(self, urls: Iterable[str], *, link_field: str = "link") -> None:
        self._urls = list(urls)
        self._link_field = link_field

    @property
    def name(self) -> str:
        return "static"

    async def get_download_links(self) -> LinkBatch:
        return LinkBatch(
            link_field=self._link_field,
            records=[{self._link_field: url} for url in self._urls],
        )
