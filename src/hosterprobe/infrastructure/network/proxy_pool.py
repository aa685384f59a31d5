"""Proxy endpoints and request-time random assignment.

Endpoints are read once at startup (inline config list plus an optional
text file, one URL per line) and never change during a run.
"""

from __future__ import annotations

import random
from collections.abc import Iterable
from pathlib import Path
from urllib.parse import unquote, urlparse

import structlog

from hosterprobe.domain.entities import ProxyEndpoint
from hosterprobe.infrastructure.config.schema import ProxyConfig

log = structlog.get_logger(__name__)

_SUPPORTED_SCHEMES = frozenset({"http", "https"})


def parse_proxy(raw: str) -> ProxyEndpoint | None:
    """Parse ``[scheme://][user[:pass]@]host:port`` into a ``ProxyEndpoint``.

    A missing scheme defaults to ``http``.  Returns ``None`` for invalid input.
    """
    text = (raw or "").strip()
    if not text or text.startswith("#"):
        return None
    if "://" not in text:
        text = f"http://{text}"
    try:
        parsed = urlparse(text)
        port = parsed.port
    except ValueError:
        return None
    if parsed.scheme not in _SUPPORTED_SCHEMES or not parsed.hostname or not port:
        return None
    return ProxyEndpoint(
        host=parsed.hostname,
        port=port,
        scheme=parsed.scheme,
        username=unquote(parsed.username) if parsed.username is not None else None,
        password=unquote(parsed.password) if parsed.password is not None else None,
    )


def _read_proxy_file(path: Path) -> list[str]:
    return path.read_text(encoding="utf-8").splitlines()


class ProxyPool:
    """Immutable pool of proxies with uniformly random selection.

    ``pick()`` returns ``None`` when the pool is disabled or empty, so a
    disabled pool never attaches a proxy regardless of its contents.
    """

    def __init__(
        self,
        endpoints: Iterable[ProxyEndpoint] = (),
        *,
        enabled: bool = True,
        rng: random.Random | None = None,
    ) -> None:
        self._endpoints: tuple[ProxyEndpoint, ...] = tuple(endpoints)
        self._enabled = enabled
        self._rng = rng or random.Random()

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def endpoints(self) -> tuple[ProxyEndpoint, ...]:
        return self._endpoints

    def __len__(self) -> int:
        return len(self._endpoints)

    def is_active(self) -> bool:
        """True when probes should go through a proxy."""
        return self._enabled and bool(self._endpoints)

    def pick(self) -> ProxyEndpoint | None:
        """Return a uniformly random endpoint, or None when inactive."""
        if not self.is_active():
            return None
        return self._rng.choice(self._endpoints)

    @classmethod
    def from_config(cls, config: ProxyConfig) -> ProxyPool:
        """Build the pool from inline endpoints and the optional proxy file.

        Invalid lines are logged and skipped; duplicates are dropped.
        """
        raw: list[str] = list(config.endpoints)
        if config.file is not None:
            raw.extend(_read_proxy_file(config.file))

        endpoints: list[ProxyEndpoint] = []
        seen: set[ProxyEndpoint] = set()
        for line in raw:
            if not line.strip() or line.strip().startswith("#"):
                continue
            endpoint = parse_proxy(line)
            if endpoint is None:
                log.warning("proxy_entry_invalid", entry=line.strip()[:80])
                continue
            if endpoint in seen:
                continue
            seen.add(endpoint)
            endpoints.append(endpoint)

        log.info(
            "proxy_pool_loaded",
            enabled=config.enabled,
            count=len(endpoints),
            proxies=[e.masked() for e in endpoints],
        )
        return cls(endpoints, enabled=config.enabled)
