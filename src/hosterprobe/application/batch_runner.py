"""Runs one input batch through the verification pipeline."""

from __future__ import annotations

import asyncio
from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import structlog

from hosterprobe.application.pipeline import VerificationPipeline
from hosterprobe.application.unsupported_services import BatchSummary
from hosterprobe.domain.entities import LinkOutcome, LinkRecord
from hosterprobe.domain.exceptions import InputSourceError
from hosterprobe.domain.ports import InputSourcePort, ResultHandlerPort

log = structlog.get_logger(__name__)
run_log = structlog.get_logger("hosterprobe.run")


@dataclass
class BatchReport:
    """What happened to one batch.

    ``failed`` counts links whose run ended with an exception escaping the
    pipeline (typically a result handler failure).
    """

    total: int = 0
    outcomes: Counter[LinkOutcome] = field(default_factory=Counter)
    failed: int = 0
    aborted: bool = False

    def count(self, outcome: LinkOutcome) -> int:
        return self.outcomes.get(outcome, 0)


def to_record(row: Mapping[str, Any], link_field: str) -> LinkRecord:
    """Wrap one input row; the URL is read from ``link_field``."""
    raw = row.get(link_field)
    url = str(raw).strip() if raw is not None else ""
    return LinkRecord(url=url, attributes=dict(row))


class BatchRunner:
    """Reads the batch, then launches one pipeline run per link.

    Runs are started together and complete in any order.  The last record
    by input position carries the completion flag, so the summary is tied
    to that link regardless of which run finishes last.
    """

    def __init__(
        self,
        source: InputSourcePort,
        pipeline: VerificationPipeline,
        handler: ResultHandlerPort,
        summary: BatchSummary,
    ) -> None:
        self._source = source
        self._pipeline = pipeline
        self._handler = handler
        self._summary = summary

    async def run(self) -> BatchReport:
        run_log.info(
            "run_started", source=self._source.name, handler=self._handler.name
        )
        try:
            batch = await self._source.get_download_links()
        except InputSourceError as exc:
            log.error("input_source_failed", source=self._source.name, error=str(exc))
            return BatchReport(aborted=True)

        records = [to_record(row, batch.link_field) for row in batch.records]
        report = BatchReport(total=len(records))
        log.info(
            "batch_loaded",
            source=self._source.name,
            link_field=batch.link_field,
            links=len(records),
        )

        if not records:
            self._summary.emit()
            return report

        last = len(records) - 1
        results = await asyncio.gather(
            *(
                self._run_one(record, is_last=index == last)
                for index, record in enumerate(records)
            )
        )
        for outcome in results:
            if outcome is None:
                report.failed += 1
            else:
                report.outcomes[outcome] += 1

        log.info(
            "batch_finished",
            total=report.total,
            failed=report.failed,
            **{outcome.value: n for outcome, n in report.outcomes.items()},
        )
        return report

    async def _run_one(self, record: LinkRecord, *, is_last: bool) -> LinkOutcome | None:
        try:
            return await self._pipeline.verify(record, self._handler, is_last=is_last)
        except Exception as exc:  # noqa: BLE001 - per-link failures never abort the batch
            log.error(
                "link_handling_failed",
                url=record.url,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return None
