"""Google Drive provider: ``drive.google.com/file/d/{id}`` share links."""

from __future__ import annotations

from hosterprobe.domain.entities import (
    DefaultRequest,
    ProviderDescriptor,
    RequestTemplate,
)

from ._common import ERROR_PATH_SEGMENTS, status_and_marker_verifier

_OFFLINE_MARKERS: tuple[str, ...] = (
    "Sorry, the file you have requested does not exist",
    "Google Drive - Page Not Found",
)

# Private files bounce to the sign-in page instead of the file.
_LOGIN_HOSTS: frozenset[str] = frozenset({"accounts.google.com"})

GOOGLE_DRIVE = ProviderDescriptor(
    name="google_drive",
    host_names=frozenset({"drive.google.com", "docs.google.com"}),
    request=DefaultRequest(
        RequestTemplate(headers={"Accept-Language": "en-US,en;q=0.5"})
    ),
    verify=status_and_marker_verifier(
        "google_drive",
        offline_markers=_OFFLINE_MARKERS,
        dead_location_segments=ERROR_PATH_SEGMENTS | {"servicelogin"},
        dead_location_hosts=_LOGIN_HOSTS,
    ),
)
