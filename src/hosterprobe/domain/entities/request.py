"""Concrete request descriptions and proxy endpoints."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class ProxyEndpoint:
    """An HTTP(S) proxy, loaded once at startup and immutable for the run."""

    host: str
    port: int
    scheme: str = "http"
    username: str | None = None
    password: str | None = None

    def as_url(self) -> str:
        """Return the URL form accepted by ``httpx`` (credentials included)."""
        auth = ""
        if self.username is not None:
            auth = self.username
            if self.password is not None:
                auth += f":{self.password}"
            auth += "@"
        return f"{self.scheme}://{auth}{self.host}:{self.port}"

    def masked(self) -> str:
        """URL form safe for logs and result records."""
        auth = "***@" if self.username is not None else ""
        return f"{self.scheme}://{auth}{self.host}:{self.port}"


@dataclass(frozen=True)
class RequestSpec:
    """The fully resolved request the transport sends for one attempt."""

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    params: Mapping[str, str] = field(default_factory=dict)
    data: Mapping[str, str] | None = None
    timeout: float = 10.0
    follow_redirects: bool = False
    proxy: ProxyEndpoint | None = None
    tunnel: bool = True
