"""Provider catalog and registry.

``ALL_PROVIDERS`` is the typed plugin list assembled at startup; it is
validated once when the registry is built.
"""

from __future__ import annotations

from hosterprobe.domain.entities import ProviderDescriptor

from .box import BOX
from .ddl import create_all_ddl_providers
from .dropbox import DROPBOX
from .google_drive import GOOGLE_DRIVE
from .mediafire import MEDIAFIRE
from .registry import ProviderRegistry, build_registry, extract_hostname
from .request_builder import RequestBuilder
from .validation import validate_provider

ALL_PROVIDERS: tuple[ProviderDescriptor, ...] = (
    BOX,
    DROPBOX,
    GOOGLE_DRIVE,
    MEDIAFIRE,
    *create_all_ddl_providers(),
)

__all__ = [
    "ALL_PROVIDERS",
    "ProviderRegistry",
    "RequestBuilder",
    "build_registry",
    "extract_hostname",
    "validate_provider",
]
