"""Box provider: shared links on ``app.box.com`` and custom ``*.box.com`` hosts.

Enterprise accounts publish links on their own subdomain
(``acme.app.box.com``), so matching is pattern based.
"""

from __future__ import annotations

import re

from hosterprobe.domain.entities import ProviderDescriptor

from ._common import status_and_marker_verifier

_HOST_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"(?:^|\.)box\.com$"),
    re.compile(r"(?:^|\.)boxcloud\.com$"),
)

_OFFLINE_MARKERS: tuple[str, ...] = (
    "This shared file or folder link has been removed",
    "shared_link_removed",
    "Item no longer available",
)

BOX = ProviderDescriptor(
    name="box",
    host_patterns=_HOST_PATTERNS,
    verify=status_and_marker_verifier("box", offline_markers=_OFFLINE_MARKERS),
)
