from __future__ import annotations

from .proxy_pool import ProxyPool, parse_proxy

__all__ = ["ProxyPool", "parse_proxy"]
