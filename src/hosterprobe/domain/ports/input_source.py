"""Port for the source of download links to verify."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from hosterprobe.domain.entities import LinkBatch


@runtime_checkable
class InputSourcePort(Protocol):
    """Produces one ordered batch of link records per run."""

    @property
    def name(self) -> str: ...

    async def get_download_links(self) -> LinkBatch:
        """Read the batch.

        Raises:
            InputSourceError: The source could not be read.  No link of the
                batch is verified in that case.
        """
        ...
