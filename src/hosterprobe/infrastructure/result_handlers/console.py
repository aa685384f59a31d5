"""Console result handler: one human-readable line per outcome."""

from __future__ import annotations

import sys
from typing import TextIO

from hosterprobe.domain.entities import LinkRecord, Verdict


def format_result(record: LinkRecord, verdict: Verdict) -> str:
    state = "ALIVE" if verdict.alive else "DEAD"
    parts = [f"[{state}]", record.url]
    if record.provider:
        parts.append(f"provider={record.provider}")
    if verdict.reason:
        parts.append(f"reason={verdict.reason!r}")
    if verdict.status_code is not None:
        parts.append(f"status={verdict.status_code}")
    if record.redirected:
        parts.append(f"final_url={record.final_url}")
    if record.proxy:
        parts.append(f"proxy={record.proxy}")
    return " ".join(parts)


def format_error(message: str, record: LinkRecord) -> str:
    return f"[ERROR] {record.url} {message}"


class ConsoleResultHandler:
    """Writes outcomes to a text stream (stdout by default)."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @property
    def name(self) -> str:
        return "console"

    def _write(self, line: str) -> None:
        stream = self._stream or sys.stdout
        stream.write(line + "\n")
        stream.flush()

    async def handle_result(self, record: LinkRecord, verdict: Verdict) -> None:
        self._write(format_result(record, verdict))

    async def handle_error(self, message: str, record: LinkRecord) -> None:
        self._write(format_error(message, record))
