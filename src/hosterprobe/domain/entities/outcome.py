"""Terminal states of one link's verification."""

from __future__ import annotations

import enum


class LinkOutcome(str, enum.Enum):
    """How the verification of a single link ended."""

    ALIVE = "alive"
    DEAD = "dead"
    UNSUPPORTED = "unsupported"  # first link of an unknown host; reported
    UNSUPPORTED_REPEAT = "unsupported_repeat"  # counted only
    RETRIES_EXHAUSTED = "retries_exhausted"  # logged, not reported
    REDIRECT_LIMIT = "redirect_limit"
    INVALID_URL = "invalid_url"
