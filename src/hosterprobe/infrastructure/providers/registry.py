"""Registry that maps a link's hostname to the provider that can verify it."""

from __future__ import annotations

from collections.abc import Iterable
from urllib.parse import urlparse

import structlog

from hosterprobe.domain.entities import ProviderDescriptor
from hosterprobe.domain.exceptions import DuplicateProviderError, PluginError

from .validation import validate_provider

log = structlog.get_logger(__name__)


def extract_hostname(url: str) -> str:
    """Return the lower-cased hostname of ``url``, or ``""`` if unparseable."""
    try:
        return (urlparse(url).hostname or "").lower()
    except ValueError:
        return ""


class ProviderRegistry:
    """Resolves URLs to provider descriptors.

    Exact host names are checked across all providers first; only when none
    matches are the host patterns tried, provider by provider in
    registration order.  Providers are registered once at startup, after
    which the registry is only read.
    """

    def __init__(self, providers: Iterable[ProviderDescriptor] | None = None) -> None:
        self._providers: dict[str, ProviderDescriptor] = {}
        self._host_map: dict[str, ProviderDescriptor] = {}
        for provider in providers or []:
            self.register(provider)

    def register(self, provider: ProviderDescriptor) -> None:
        """Validate and register a provider.

        Raises:
            ProviderValidationError: The descriptor breaks the contract.
            DuplicateProviderError: The name is already registered.
        """
        validate_provider(provider)
        if provider.name in self._providers:
            raise DuplicateProviderError(
                f"Provider name '{provider.name}' already exists"
            )
        self._providers[provider.name] = provider
        for host in provider.host_names:
            # First registration wins for a shared host name.
            self._host_map.setdefault(host.lower(), provider)
        log.debug(
            "provider_registered",
            provider=provider.name,
            hosts=len(provider.host_names),
            patterns=len(provider.host_patterns),
        )

    @property
    def provider_names(self) -> list[str]:
        """Registered provider names in registration order."""
        return list(self._providers.keys())

    def __len__(self) -> int:
        return len(self._providers)

    def resolve(self, url: str) -> ProviderDescriptor | None:
        """Return the provider for ``url``'s host, or None when unsupported."""
        hostname = extract_hostname(url)
        if not hostname:
            return None

        provider = self._host_map.get(hostname)
        if provider is not None:
            return provider

        for provider in self._providers.values():
            if provider.matches_pattern(hostname):
                return provider
        return None


def build_registry(providers: Iterable[object]) -> ProviderRegistry:
    """Build a registry from a plugin list, excluding invalid plugins.

    Each rejected plugin is logged at error level; the rest are registered.
    """
    registry = ProviderRegistry()
    for provider in providers:
        try:
            registry.register(provider)  # type: ignore[arg-type]
        except PluginError as exc:
            log.error(
                "provider_rejected",
                provider=getattr(provider, "name", type(provider).__name__),
                error_type=type(exc).__name__,
                error_message=str(exc),
            )
    log.info("providers_registered", count=len(registry), names=registry.provider_names)
    return registry
