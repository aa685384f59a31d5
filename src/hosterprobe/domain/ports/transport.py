"""Port for sending a single probe request."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from hosterprobe.domain.entities import RequestSpec

if TYPE_CHECKING:
    import httpx


@runtime_checkable
class ProbeTransportPort(Protocol):
    """Sends exactly one request: no retries, no HTTP redirect following.

    Non-2xx answers are returned as normal responses.  Network failures and
    timeouts raise ``httpx.HTTPError``.
    """

    async def send(self, spec: RequestSpec) -> httpx.Response: ...

    async def aclose(self) -> None: ...
