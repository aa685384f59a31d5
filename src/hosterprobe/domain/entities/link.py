"""Link records and batches flowing through the verification pipeline."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass
class LinkRecord:
    """One candidate download, as produced by an input source.

    ``attributes`` is the opaque row handed over by the input source.  The
    remaining fields are provenance the pipeline fills in before the record
    reaches a result handler.  A record is consumed once and never reused.
    """

    url: str
    attributes: dict[str, Any] = field(default_factory=dict)

    provider: str | None = None
    proxy: str | None = None  # masked proxy URL, None when sent directly
    redirected: bool = False
    final_url: str | None = None
    attempts: int = 0

    def as_dict(self) -> dict[str, Any]:
        """Return the input attributes merged with the provenance fields."""
        return {
            **self.attributes,
            "url": self.url,
            "provider": self.provider,
            "proxy": self.proxy,
            "redirected": self.redirected,
            "final_url": self.final_url,
            "attempts": self.attempts,
        }


@dataclass(frozen=True)
class LinkBatch:
    """Ordered records from one input source read.

    ``link_field`` names the attribute that holds the URL in each record.
    """

    link_field: str
    records: list[Mapping[str, Any]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)
