"""Unsupported-service bookkeeping and the end-of-batch summary."""

from __future__ import annotations

import threading

import structlog

# Records on this logger also land in the run log file.
run_log = structlog.get_logger("hosterprobe.run")


class UnsupportedServiceTracker:
    """Counts links per host that no provider can verify.

    Only the first occurrence of a host is logged (and reported by the
    caller); later occurrences are counted silently.  The check-and-increment
    is serialized under a lock, so two concurrent links can never both be
    the first for the same host.
    """

    def __init__(self) -> None:
        self._counts: dict[str, int] = {}
        self._lock = threading.Lock()

    def record(self, host: str, url: str | None = None) -> bool:
        """Count one occurrence of ``host``; True if it is the first one."""
        with self._lock:
            count = self._counts.get(host, 0) + 1
            self._counts[host] = count
        if count == 1:
            run_log.info("unsupported_service_found", host=host, url=url)
            return True
        return False

    def count(self, host: str) -> int:
        with self._lock:
            return self._counts.get(host, 0)

    def snapshot(self) -> dict[str, int]:
        """Copy of the host -> occurrence map."""
        with self._lock:
            return dict(self._counts)


class BatchSummary:
    """Emits the unsupported-services summary and the run-finished marker.

    ``emit()`` writes at most once per instance; later calls are no-ops.
    """

    def __init__(self, tracker: UnsupportedServiceTracker) -> None:
        self._tracker = tracker
        self._emitted = False
        self._lock = threading.Lock()

    @property
    def emitted(self) -> bool:
        return self._emitted

    def emit(self) -> bool:
        """Write the summary; returns False if it was already written."""
        with self._lock:
            if self._emitted:
                return False
            self._emitted = True
        services = self._tracker.snapshot()
        run_log.info(
            "unsupported_services_summary",
            unsupported_services=services,
            hosts=len(services),
            links=sum(services.values()),
        )
        run_log.info("run_finished")
        return True
