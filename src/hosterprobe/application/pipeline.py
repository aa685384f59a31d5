"""The verification pipeline: resolve, request, interpret, redirect or retry, report."""

from __future__ import annotations

import asyncio
from urllib.parse import urlparse

import structlog

from hosterprobe.application.unsupported_services import (
    BatchSummary,
    UnsupportedServiceTracker,
)
from hosterprobe.domain.entities import (
    AttemptContext,
    LinkOutcome,
    LinkRecord,
    Redirect,
)
from hosterprobe.domain.ports import (
    ProbeTransportPort,
    ProviderResolverPort,
    RequestBuilderPort,
    ResultHandlerPort,
)

log = structlog.get_logger(__name__)

NO_SUPPORT_MESSAGE = "No support found for file service."
REDIRECT_LIMIT_MESSAGE = "Too many provider redirects."


def _hostname(url: str) -> str:
    try:
        return (urlparse(url).hostname or "").lower()
    except ValueError:
        return ""


class VerificationPipeline:
    """Verifies one link at a time; many links may run concurrently.

    Each link is driven through an explicit ``AttemptContext``:

    - unsupported host: counted by the tracker, reported once per host;
    - transport or interpretation failure: retried on the same URL while
      budget remains, otherwise logged and dropped (no report);
    - provider redirect: the link is marked redirected and the new URL is
      probed with the remaining budget, up to ``max_redirects`` hops;
    - verdict: handed to the result handler.

    When the link is the last of its batch, the end-of-batch summary is
    emitted after that link's terminal action, whatever it was.  Errors
    raised by the result handler are not caught here.
    """

    def __init__(
        self,
        registry: ProviderResolverPort,
        request_builder: RequestBuilderPort,
        transport: ProbeTransportPort,
        tracker: UnsupportedServiceTracker,
        summary: BatchSummary,
        *,
        max_retries: int = 0,
        max_redirects: int = 10,
        delay_seconds: float | None = None,
    ) -> None:
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if max_redirects < 0:
            raise ValueError("max_redirects must be >= 0")
        self._registry = registry
        self._builder = request_builder
        self._transport = transport
        self._tracker = tracker
        self._summary = summary
        self._max_retries = max_retries
        self._max_redirects = max_redirects
        self._delay = delay_seconds

    async def verify(
        self,
        record: LinkRecord,
        handler: ResultHandlerPort,
        *,
        is_last: bool = False,
    ) -> LinkOutcome:
        """Drive ``record`` to a terminal outcome."""
        ctx = AttemptContext(
            url=record.url, retries_left=self._max_retries, is_last=is_last
        )
        try:
            return await self._drive(record, ctx, handler)
        finally:
            if ctx.is_last:
                self._summary.emit()

    async def _drive(
        self,
        record: LinkRecord,
        ctx: AttemptContext,
        handler: ResultHandlerPort,
    ) -> LinkOutcome:
        if not record.url or not _hostname(record.url):
            log.error("link_url_invalid", url=record.url)
            return LinkOutcome.INVALID_URL

        delayed = False
        while True:
            provider = self._registry.resolve(ctx.url)
            if provider is None:
                return await self._report_unsupported(record, ctx, handler)
            record.provider = provider.name

            if self._delay and not delayed:
                delayed = True
                await asyncio.sleep(self._delay)

            record.attempts = ctx.attempt
            try:
                spec = self._builder.build(provider, ctx.url, record)
                response = await self._transport.send(spec)
                result = provider.verify(response)
            except Exception as exc:  # noqa: BLE001 - transport or provider failure
                if ctx.can_retry:
                    log.warning(
                        "probe_attempt_failed",
                        url=ctx.url,
                        provider=provider.name,
                        attempt=ctx.attempt,
                        retries_left=ctx.retries_left,
                        error_type=type(exc).__name__,
                        error=str(exc),
                    )
                    ctx = ctx.retry()
                    continue
                log.error(
                    "probe_failed",
                    url=ctx.url,
                    link=record.url,
                    provider=provider.name,
                    attempts=ctx.attempt,
                    error_type=type(exc).__name__,
                    error=str(exc),
                )
                return LinkOutcome.RETRIES_EXHAUSTED

            if isinstance(result, Redirect):
                if ctx.redirects >= self._max_redirects:
                    log.error(
                        "provider_redirect_limit",
                        url=ctx.url,
                        link=record.url,
                        target=result.url,
                        redirects=ctx.redirects,
                    )
                    await handler.handle_error(REDIRECT_LIMIT_MESSAGE, record)
                    return LinkOutcome.REDIRECT_LIMIT
                log.debug(
                    "provider_redirect",
                    url=ctx.url,
                    target=result.url,
                    provider=provider.name,
                )
                record.redirected = True
                ctx = ctx.redirect(result.url)
                continue

            record.final_url = ctx.url
            log.debug(
                "probe_verdict",
                url=record.url,
                provider=provider.name,
                alive=result.alive,
                reason=result.reason,
            )
            await handler.handle_result(record, result)
            return LinkOutcome.ALIVE if result.alive else LinkOutcome.DEAD

    async def _report_unsupported(
        self,
        record: LinkRecord,
        ctx: AttemptContext,
        handler: ResultHandlerPort,
    ) -> LinkOutcome:
        host = _hostname(ctx.url)
        if not self._tracker.record(host, url=ctx.url):
            return LinkOutcome.UNSUPPORTED_REPEAT
        await handler.handle_error(NO_SUPPORT_MESSAGE, record)
        return LinkOutcome.UNSUPPORTED
