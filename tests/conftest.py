"""Shared test fixtures for the hosterprobe test suite."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from fakes import FakeTransport, make_provider

from hosterprobe.application import (
    BatchSummary,
    UnsupportedServiceTracker,
    VerificationPipeline,
)
from hosterprobe.domain.entities import LinkRecord, ProviderDescriptor
from hosterprobe.infrastructure.providers import ProviderRegistry, RequestBuilder


@pytest.fixture()
def result_handler() -> MagicMock:
    """Result handler double with async ``handle_result`` / ``handle_error``."""
    handler = MagicMock()
    handler.name = "mock"
    handler.handle_result = AsyncMock()
    handler.handle_error = AsyncMock()
    return handler


@pytest.fixture()
def tracker() -> UnsupportedServiceTracker:
    return UnsupportedServiceTracker()


@pytest.fixture()
def summary(tracker: UnsupportedServiceTracker) -> BatchSummary:
    return BatchSummary(tracker)


@pytest.fixture()
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture()
def provider_a() -> ProviderDescriptor:
    """Provider P1 for ``example-a.com``; always reports alive."""
    return make_provider("p1", "example-a.com")


@pytest.fixture()
def make_pipeline(
    tracker: UnsupportedServiceTracker,
    summary: BatchSummary,
    transport: FakeTransport,
) -> Callable[..., VerificationPipeline]:
    """Factory: pipeline over the given providers and the shared fakes."""

    def _make(
        *providers: ProviderDescriptor,
        probe: FakeTransport | None = None,
        **kwargs: Any,
    ) -> VerificationPipeline:
        return VerificationPipeline(
            ProviderRegistry(providers),
            RequestBuilder(),
            probe or transport,
            tracker,
            summary,
            **kwargs,
        )

    return _make


@pytest.fixture()
def record() -> LinkRecord:
    return LinkRecord(url="https://example-a.com/f1", attributes={"title": "f1"})
