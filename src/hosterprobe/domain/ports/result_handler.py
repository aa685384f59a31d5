"""Port for publishing per-link verification outcomes."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from hosterprobe.domain.entities import LinkRecord, Verdict


@runtime_checkable
class ResultHandlerPort(Protocol):
    """Records or publishes the final outcome of one link.

    Implementations must not raise for expected conditions (a dead link is
    an outcome, not an error).  Unexpected failures propagate to the caller.
    """

    @property
    def name(self) -> str:
        """Handler name (e.g. 'console', 'slack')."""
        ...

    async def handle_result(self, record: LinkRecord, verdict: Verdict) -> None:
        """Publish a terminal alive/dead verdict for ``record``."""
        ...

    async def handle_error(self, message: str, record: LinkRecord) -> None:
        """Publish a failure that has no provider verdict (e.g. unsupported host)."""
        ...
