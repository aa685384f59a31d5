"""Generic DDL providers: one table-driven definition for page-marker hosters.

Each hoster is described by a ``DDLHosterConfig`` (name, exact hosts,
optional host patterns, offline markers).  The response interpretation
lives once in ``status_and_marker_verifier``.

Adding a new DDL hoster = adding a new ``DDLHosterConfig`` constant +
appending it to ``ALL_DDL_CONFIGS``.

3xx answers that do not point at an error page are provider redirects:
link protectors such as go4up answer with an interstitial redirect to the
mirror that actually holds the file.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from hosterprobe.domain.entities import ProviderDescriptor

from ._common import status_and_marker_verifier


@dataclass(frozen=True)
class DDLHosterConfig:
    """Immutable configuration for one DDL hoster.

    Parameters
    ----------
    name:
        Provider name (e.g. ``"uploaded"``).
    hosts:
        Exact host names served by the hoster.
    offline_markers:
        Strings whose presence in the response HTML indicates the file is gone.
    host_patterns:
        Optional regexes for hosts that cannot be enumerated (mirror subdomains).
    """

    name: str
    hosts: frozenset[str]
    offline_markers: tuple[str, ...]
    host_patterns: tuple[re.Pattern[str], ...] = ()


def _www(*domains: str) -> frozenset[str]:
    """Bare domains plus their ``www.`` variants."""
    return frozenset(d for domain in domains for d in (domain, f"www.{domain}"))


FILEFACTORY = DDLHosterConfig(
    name="filefactory",
    hosts=_www("filefactory.com"),
    offline_markers=(
        "File Not Found",
        "This file is no longer available",
        "File has been removed",
    ),
)

GO4UP = DDLHosterConfig(
    name="go4up",
    hosts=_www("go4up.com"),
    offline_markers=(
        "File Not Found",
        "Link not found",
        "has been removed",
    ),
)

NITROFLARE = DDLHosterConfig(
    name="nitroflare",
    hosts=_www("nitroflare.com", "nitro.download"),
    offline_markers=(
        "File Not Found",
        "This file has been removed",
        ">File doesn't exist",
    ),
)

ONEFICHIER = DDLHosterConfig(
    name="1fichier",
    hosts=_www(
        "1fichier.com",
        "alterupload.com",
        "cjoint.net",
        "desfichiers.com",
        "dfichiers.com",
        "megadl.fr",
        "mesfichiers.org",
        "piecejointe.net",
        "pjointe.com",
        "tenvoi.com",
        "dl4free.com",
    ),
    offline_markers=(
        "The requested file could not be found",
        "The requested file has been deleted",
        "File not found",
    ),
    host_patterns=(re.compile(r"^[a-z0-9-]+\.1fichier\.com$"),),
)

RAPIDGATOR = DDLHosterConfig(
    name="rapidgator",
    hosts=_www("rapidgator.net", "rapidgator.asia", "rg.to"),
    offline_markers=(
        ">404 File not found",
        "File not found",
    ),
)

TURBOBIT = DDLHosterConfig(
    name="turbobit",
    hosts=_www("turbobit.net", "turb.to", "turbo.to"),
    offline_markers=(
        "File Not Found",
        "file was removed",
        "File was not found",
        ">This document is not available",
    ),
)

UPLOADED = DDLHosterConfig(
    name="uploaded",
    hosts=_www("uploaded.net", "uploaded.to", "ul.to"),
    offline_markers=(
        "File Not Found",
        "File was deleted",
        "The requested file isn't available anymore",
        "File not found",
    ),
)


ALL_DDL_CONFIGS: tuple[DDLHosterConfig, ...] = (
    FILEFACTORY,
    GO4UP,
    NITROFLARE,
    ONEFICHIER,
    RAPIDGATOR,
    TURBOBIT,
    UPLOADED,
)


def to_provider(config: DDLHosterConfig) -> ProviderDescriptor:
    """Build the provider descriptor for one DDL hoster."""
    return ProviderDescriptor(
        name=config.name,
        host_names=config.hosts,
        host_patterns=config.host_patterns,
        verify=status_and_marker_verifier(
            config.name, offline_markers=config.offline_markers
        ),
    )


def create_all_ddl_providers() -> list[ProviderDescriptor]:
    """Create descriptors for all known DDL hosters."""
    return [to_provider(cfg) for cfg in ALL_DDL_CONFIGS]
