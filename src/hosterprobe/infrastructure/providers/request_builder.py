"""Turns a provider + link URL into the concrete request for one attempt."""

from __future__ import annotations

import structlog

from hosterprobe.domain.entities import (
    CustomRequest,
    DefaultRequest,
    LinkRecord,
    ProviderDescriptor,
    RequestSpec,
    RequestTemplate,
)
from hosterprobe.infrastructure.network.proxy_pool import ProxyPool

log = structlog.get_logger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_10_1) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/41.0.2227.1 Safari/537.36"
)


class RequestBuilder:
    """Builds ``RequestSpec`` objects with the run-wide defaults applied.

    Every request gets: no HTTP redirect following, the fixed timeout and the
    static browser-like User-Agent (a provider header of the same name wins).
    When the proxy pool is active, a random endpoint is attached and
    tunneling is turned off for that request.
    """

    def __init__(
        self,
        proxy_pool: ProxyPool | None = None,
        *,
        timeout_seconds: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._proxy_pool = proxy_pool or ProxyPool(enabled=False)
        self._timeout = timeout_seconds
        self._user_agent = user_agent

    @staticmethod
    def template_for(provider: ProviderDescriptor, url: str) -> RequestTemplate:
        """Pick the provider's request template for ``url``."""
        strategy = provider.request
        if isinstance(strategy, CustomRequest):
            return strategy.build(url)
        if isinstance(strategy, DefaultRequest):
            return strategy.template
        return RequestTemplate()

    def build(
        self,
        provider: ProviderDescriptor,
        url: str,
        record: LinkRecord | None = None,
    ) -> RequestSpec:
        """Build the request for ``url``; note the proxy used on ``record``."""
        template = self.template_for(provider, url)
        headers = dict(template.headers)
        # Header names are case-insensitive; a provider User-Agent replaces ours.
        if not any(key.lower() == "user-agent" for key in headers):
            headers = {"User-Agent": self._user_agent, **headers}

        proxy = self._proxy_pool.pick()
        if proxy is not None:
            log.debug("probe_using_proxy", proxy=proxy.masked(), url=url)
        if record is not None:
            record.proxy = proxy.masked() if proxy is not None else None

        return RequestSpec(
            method=template.method.upper(),
            url=template.url or url,
            headers=headers,
            params=dict(template.params),
            data=dict(template.data) if template.data is not None else None,
            timeout=self._timeout,
            follow_redirects=False,
            proxy=proxy,
            tunnel=proxy is None,
        )
