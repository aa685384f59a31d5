"""Composition root: builds the process-scoped components for one run."""

from __future__ import annotations

from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx
import structlog

from hosterprobe.application import (
    BatchReport,
    BatchRunner,
    BatchSummary,
    UnsupportedServiceTracker,
    VerificationPipeline,
)
from hosterprobe.domain.ports import InputSourcePort, ResultHandlerPort
from hosterprobe.infrastructure.config import AppConfig
from hosterprobe.infrastructure.http import HttpxProbeTransport
from hosterprobe.infrastructure.input_sources import (
    StaticInputSource,
    create_input_source,
)
from hosterprobe.infrastructure.network import ProxyPool
from hosterprobe.infrastructure.providers import (
    ALL_PROVIDERS,
    RequestBuilder,
    build_registry,
)
from hosterprobe.infrastructure.result_handlers import create_result_handler

log = structlog.get_logger(__name__)


@dataclass
class Runtime:
    """Everything one batch run needs, wired together."""

    runner: BatchRunner
    tracker: UnsupportedServiceTracker
    summary: BatchSummary
    transport: HttpxProbeTransport
    handler: ResultHandlerPort


def _input_source(config: AppConfig, urls: Sequence[str]) -> InputSourcePort:
    if urls:
        return StaticInputSource(urls, link_field=config.input.link_field)
    return create_input_source(config)


@asynccontextmanager
async def build_runtime(
    config: AppConfig,
    *,
    urls: Sequence[str] = (),
    transport: HttpxProbeTransport | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> AsyncIterator[Runtime]:
    """Wire config -> proxy pool -> transport -> registry -> pipeline -> runner.

    Owned network resources (probe transport, the result handler's client)
    are closed on exit; injected ones are left to the caller.
    """
    source = _input_source(config, urls)

    proxy_pool = ProxyPool.from_config(config.proxy)
    registry = build_registry(ALL_PROVIDERS)
    builder = RequestBuilder(
        proxy_pool,
        timeout_seconds=config.http_timeout_seconds,
        user_agent=config.http_user_agent,
    )

    owns_transport = transport is None
    probe_transport = transport or HttpxProbeTransport(
        pool_size=config.http_pool_size,
        timeout_seconds=config.http_timeout_seconds,
    )
    owns_client = http_client is None and config.result_handler.name == "slack"
    handler_client = http_client
    if owns_client:
        handler_client = httpx.AsyncClient(timeout=config.http_timeout_seconds)

    try:
        handler = create_result_handler(config, http_client=handler_client)
        tracker = UnsupportedServiceTracker()
        summary = BatchSummary(tracker)
        pipeline = VerificationPipeline(
            registry,
            builder,
            probe_transport,
            tracker,
            summary,
            max_retries=config.retries,
            max_redirects=config.max_redirects,
            delay_seconds=(
                config.delay_ms / 1000.0 if config.delay_ms is not None else None
            ),
        )
        log.info(
            "runtime_ready",
            providers=len(registry),
            proxies=len(proxy_pool) if proxy_pool.is_active() else 0,
            source=source.name,
            handler=handler.name,
            retries=config.retries,
            delay_ms=config.delay_ms,
        )
        yield Runtime(
            runner=BatchRunner(source, pipeline, handler, summary),
            tracker=tracker,
            summary=summary,
            transport=probe_transport,
            handler=handler,
        )
    finally:
        if owns_transport:
            await probe_transport.aclose()
        if owns_client and handler_client is not None:
            await handler_client.aclose()


async def run_batch(config: AppConfig, *, urls: Sequence[str] = ()) -> BatchReport:
    """Run one batch end to end."""
    async with build_runtime(config, urls=urls) as runtime:
        return await runtime.runner.run()
