"""Provider descriptors: per-hoster request shape and response interpretation.

Pure value objects.  A provider is described once at startup and only read
afterwards, so descriptors are shared freely across concurrent probes.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    import httpx


@dataclass(frozen=True)
class RequestTemplate:
    """Provider-specific request shape (everything except the target URL)."""

    method: str = "GET"
    url: str | None = None  # None = probe the link URL itself
    headers: Mapping[str, str] = field(default_factory=dict)
    params: Mapping[str, str] = field(default_factory=dict)
    data: Mapping[str, str] | None = None


@dataclass(frozen=True)
class DefaultRequest:
    """Use a static template for every URL of this provider."""

    template: RequestTemplate = field(default_factory=RequestTemplate)


@dataclass(frozen=True)
class CustomRequest:
    """Build the request from the link URL (e.g. call an API with a file id)."""

    build: Callable[[str], RequestTemplate]


RequestStrategy = Union[DefaultRequest, CustomRequest]


@dataclass(frozen=True)
class Verdict:
    """Terminal interpretation of a probe response."""

    alive: bool
    reason: str = ""
    status_code: int | None = None


@dataclass(frozen=True)
class Redirect:
    """Provider-mediated redirect: the real file lives at ``url``.

    Distinct from HTTP redirects, which the transport never follows.
    """

    url: str


VerifyResult = Union[Verdict, Redirect]
VerifyFn = Callable[["httpx.Response"], VerifyResult]


@dataclass(frozen=True)
class ProviderDescriptor:
    """Everything the pipeline needs to know about one file hoster."""

    name: str
    verify: VerifyFn
    host_names: frozenset[str] = frozenset()
    host_patterns: tuple[re.Pattern[str], ...] = ()
    request: RequestStrategy = field(default_factory=DefaultRequest)

    def matches_host(self, hostname: str) -> bool:
        return hostname in self.host_names

    def matches_pattern(self, hostname: str) -> bool:
        return any(pattern.search(hostname) for pattern in self.host_patterns)

