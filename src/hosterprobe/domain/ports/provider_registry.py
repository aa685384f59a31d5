"""Ports for provider lookup and request construction."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from hosterprobe.domain.entities import LinkRecord, ProviderDescriptor, RequestSpec


@runtime_checkable
class ProviderResolverPort(Protocol):
    """Maps a URL to the provider able to verify it."""

    def resolve(self, url: str) -> ProviderDescriptor | None:
        """Return the matching provider, or None for an unsupported host."""
        ...


@runtime_checkable
class RequestBuilderPort(Protocol):
    """Builds the concrete request for one attempt."""

    def build(
        self,
        provider: ProviderDescriptor,
        url: str,
        record: LinkRecord | None = None,
    ) -> RequestSpec: ...
