"""Mediafire provider: checks DDL links via the public file API.

Mediafire is a file hosting service. URLs follow several patterns:
    https://www.mediafire.com/file/{quickkey}/{filename}/file
    https://www.mediafire.com/file/{quickkey}
    https://www.mediafire.com/download/{quickkey}
    https://www.mediafire.com/view/{quickkey}
    https://www.mediafire.com/?{quickkey}

The public file info API (no auth required for public files):
    GET https://www.mediafire.com/api/1.5/file/get_info.php?quick_key={ID}&response_format=json
    → {"response": {"result": "Success", "file_info": {filename, size, hash, ...}}}

Links whose quick key cannot be extracted are probed as a plain page.
"""

from __future__ import annotations

import re
from urllib.parse import urlparse

import httpx
import structlog

from hosterprobe.domain.entities import (
    CustomRequest,
    ProviderDescriptor,
    RequestTemplate,
    Verdict,
    VerifyResult,
)

from ._common import raise_for_server_error, status_and_marker_verifier

log = structlog.get_logger(__name__)

# File ID (quickkey): alphanumeric, extracted from path or query string
_FILE_ID_RE = re.compile(r"^/(?:file|download|view)/([a-z0-9]+)")
_QUERY_ID_RE = re.compile(r"^\?([a-z0-9]+)$")

API_URL = "https://www.mediafire.com/api/1.5/file/get_info.php"

# API error codes that indicate file is offline
_OFFLINE_ERROR_CODES = {110, 111}

_verify_page = status_and_marker_verifier(
    "mediafire",
    offline_markers=("Invalid or Deleted File", "File Removed for Violation"),
)


def extract_file_id(url: str) -> str | None:
    """Extract the quickkey file ID from a Mediafire URL."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return None
    if "mediafire" not in (parsed.hostname or ""):
        return None

    match = _FILE_ID_RE.search(parsed.path)
    if match:
        return match.group(1)

    if parsed.path in ("/", "") and parsed.query:
        qmatch = _QUERY_ID_RE.search(f"?{parsed.query}")
        if qmatch:
            return qmatch.group(1)
    return None


def build_request(url: str) -> RequestTemplate:
    file_id = extract_file_id(url)
    if not file_id:
        return RequestTemplate()
    return RequestTemplate(
        url=API_URL,
        params={"quick_key": file_id, "response_format": "json"},
    )


def verify(resp: httpx.Response) -> VerifyResult:
    """Interpret the file-info API answer (or the plain page as fallback)."""
    if resp.request.url.path != urlparse(API_URL).path:
        return _verify_page(resp)

    raise_for_server_error(resp)
    status = resp.status_code

    try:
        data = resp.json()
    except ValueError:
        return Verdict(alive=False, reason="invalid api json", status_code=status)

    response = data.get("response", {}) if isinstance(data, dict) else {}
    result = response.get("result")
    if result != "Success":
        error = response.get("error")
        if isinstance(error, int) and error in _OFFLINE_ERROR_CODES:
            return Verdict(alive=False, reason="file offline", status_code=status)
        return Verdict(
            alive=False, reason=f"api error: {result}", status_code=status
        )

    file_info = response.get("file_info", {})
    if not isinstance(file_info, dict):
        return Verdict(
            alive=False, reason="missing file info", status_code=status
        )
    if file_info.get("delete_date"):
        return Verdict(alive=False, reason="file deleted", status_code=status)

    log.debug("mediafire_file_alive", filename=file_info.get("filename", ""))
    return Verdict(alive=True, status_code=status)


MEDIAFIRE = ProviderDescriptor(
    name="mediafire",
    host_names=frozenset({"mediafire.com", "www.mediafire.com"}),
    request=CustomRequest(build=build_request),
    verify=verify,
)
