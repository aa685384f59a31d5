"""Dropbox provider: shared-link pages under ``/s/`` and ``/scl/fi/``.

A live shared link answers 200 with the preview page, or 3xx towards the
content host (``dl.dropboxusercontent.com``), which is followed as a
provider redirect.  Removed links answer 404/410 or redirect to an error
page.
"""

from __future__ import annotations

from hosterprobe.domain.entities import (
    DefaultRequest,
    ProviderDescriptor,
    RequestTemplate,
)

from ._common import ERROR_PATH_SEGMENTS, status_and_marker_verifier

_OFFLINE_MARKERS: tuple[str, ...] = (
    "This item was deleted",
    "The file you're looking for has been deleted",
    "Error (404)",
    "This link has been disabled",
)

DROPBOX = ProviderDescriptor(
    name="dropbox",
    host_names=frozenset(
        {"dropbox.com", "www.dropbox.com", "dl.dropboxusercontent.com"}
    ),
    request=DefaultRequest(
        RequestTemplate(headers={"Accept-Language": "en-US,en;q=0.5"})
    ),
    verify=status_and_marker_verifier(
        "dropbox",
        offline_markers=_OFFLINE_MARKERS,
        dead_location_segments=ERROR_PATH_SEGMENTS | {"deleted"},
    ),
)
