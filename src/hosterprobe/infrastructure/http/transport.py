"""httpx transport for single-shot probe requests."""

from __future__ import annotations

import asyncio

import httpx
import structlog

from hosterprobe.domain.entities import ProxyEndpoint, RequestSpec

log = structlog.get_logger(__name__)


class HttpxProbeTransport:
    """Sends one probe per call through a shared, bounded connection budget.

    httpx binds proxies per client, so one ``AsyncClient`` is kept per proxy
    route (plus one for direct requests), created on first use.  A shared
    semaphore caps the probes in flight across all routes at ``pool_size``;
    excess probes wait for a free slot.

    The transport never retries and never follows HTTP redirects.  Non-2xx
    answers are returned as-is; network errors and timeouts raise
    ``httpx.HTTPError``.
    """

    def __init__(
        self,
        *,
        pool_size: int = 5,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._pool_size = pool_size
        self._timeout = timeout_seconds
        self._transport = transport
        self._semaphore = asyncio.Semaphore(pool_size)
        self._clients: dict[str | None, httpx.AsyncClient] = {}

    def _client_for(self, proxy: ProxyEndpoint | None) -> httpx.AsyncClient:
        key = proxy.as_url() if proxy is not None else None
        client = self._clients.get(key)
        if client is None:
            client = httpx.AsyncClient(
                proxy=key if self._transport is None else None,
                transport=self._transport,
                timeout=httpx.Timeout(self._timeout),
                follow_redirects=False,
                limits=httpx.Limits(
                    max_connections=self._pool_size,
                    max_keepalive_connections=self._pool_size,
                ),
            )
            self._clients[key] = client
            log.debug(
                "probe_client_created",
                proxy=proxy.masked() if proxy is not None else None,
            )
        return client

    async def send(self, spec: RequestSpec) -> httpx.Response:
        client = self._client_for(spec.proxy)
        async with self._semaphore:
            return await client.request(
                spec.method,
                spec.url,
                headers=dict(spec.headers),
                params=dict(spec.params) or None,
                data=dict(spec.data) if spec.data is not None else None,
                timeout=spec.timeout,
                follow_redirects=spec.follow_redirects,
            )

    async def aclose(self) -> None:
        """Close every client created so far."""
        clients = list(self._clients.values())
        self._clients.clear()
        for client in clients:
            await client.aclose()
