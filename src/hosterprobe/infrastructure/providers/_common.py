"""Shared response-interpretation helpers for provider descriptors."""

from __future__ import annotations

from urllib.parse import urlsplit

import httpx
import structlog

from hosterprobe.domain.entities import Redirect, Verdict, VerifyResult
from hosterprobe.domain.entities.provider import VerifyFn

log = structlog.get_logger(__name__)

# Status codes that definitively mean the file is gone.
OFFLINE_STATUS_CODES: frozenset[int] = frozenset({404, 410})

# Path segments (lower-case, extension ignored) of a hoster error page.
ERROR_PATH_SEGMENTS: frozenset[str] = frozenset({"404", "error", "removed"})


def location_of(resp: httpx.Response) -> str | None:
    """Absolute ``Location`` target of a 3xx response, or None."""
    raw = resp.headers.get("location")
    if not raw:
        return None
    return str(resp.request.url.join(raw))


def is_error_location(
    target: str,
    *,
    segments: frozenset[str] = ERROR_PATH_SEGMENTS,
    hosts: frozenset[str] = frozenset(),
) -> bool:
    """True when *target* is an error page.

    A match is a whole path segment such as ``/404`` or ``/error.html``, or
    a host in *hosts* (subdomains included).  File names that merely start
    with a marker (``/4040_errors.mp3``) do not match.
    """
    parts = urlsplit(target)
    host = (parts.hostname or "").lower()
    if any(host == h or host.endswith("." + h) for h in hosts):
        return True
    for segment in parts.path.lower().split("/"):
        if segment.split(".", 1)[0] in segments:
            return True
    return False


def raise_for_server_error(resp: httpx.Response) -> None:
    """Raise on 5xx so the pipeline treats the answer as transient and retries."""
    if resp.status_code >= 500:
        resp.raise_for_status()


def status_and_marker_verifier(
    name: str,
    *,
    offline_markers: tuple[str, ...] = (),
    offline_status: frozenset[int] = OFFLINE_STATUS_CODES,
    dead_location_segments: frozenset[str] = ERROR_PATH_SEGMENTS,
    dead_location_hosts: frozenset[str] = frozenset(),
    follow_location: bool = True,
) -> VerifyFn:
    """Build a verify function from a status table and page markers.

    Decision order:

    1. 5xx raises ``httpx.HTTPStatusError`` (retryable).
    2. A status in *offline_status* is dead.
    3. 3xx: a ``Location`` that ``is_error_location`` accepts is dead; any other
       ``Location`` is a provider redirect when *follow_location* is set.
    4. Any other non-200 status is dead.
    5. 200 with an offline marker in the body is dead, otherwise alive.
    """

    def verify(resp: httpx.Response) -> VerifyResult:
        raise_for_server_error(resp)
        status = resp.status_code

        if status in offline_status:
            return Verdict(alive=False, reason="offline status", status_code=status)

        if 300 <= status < 400:
            target = location_of(resp)
            if target is None:
                return Verdict(
                    alive=False, reason="redirect without location", status_code=status
                )
            if is_error_location(
                target, segments=dead_location_segments, hosts=dead_location_hosts
            ):
                return Verdict(
                    alive=False, reason="redirect to error page", status_code=status
                )
            if follow_location:
                return Redirect(url=target)
            return Verdict(alive=False, reason="unexpected redirect", status_code=status)

        if status != 200:
            return Verdict(
                alive=False, reason=f"unexpected status {status}", status_code=status
            )

        html = resp.text
        for marker in offline_markers:
            if marker in html:
                log.debug("provider_offline_marker", provider=name, marker=marker)
                return Verdict(
                    alive=False, reason=f"offline marker: {marker}", status_code=status
                )

        return Verdict(alive=True, status_code=status)

    return verify
