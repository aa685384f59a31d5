"""Shared fixtures for integration tests.

These tests use the real infrastructure components (config loader, probe
transport, provider catalog, file input) with mocked HTTP via respx.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import respx
import yaml
from structlog.testing import capture_logs

from hosterprobe.infrastructure.config import AppConfig


@pytest.fixture(autouse=True)
def _captured_logs():
    """Keep unconfigured structlog output off stdout, where results are printed."""
    with capture_logs() as logs:
        yield logs


@pytest.fixture()
def respx_mock() -> respx.MockRouter:
    """Explicit respx mock router for request interception."""
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture()
def links_file(tmp_path: Path):
    """Factory: write the given records to a YAML links file."""

    def _write(records: list, name: str = "links.yaml") -> Path:
        path = tmp_path / name
        path.write_text(yaml.safe_dump(records), encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def app_config(tmp_path: Path):
    """Factory: AppConfig with log files under tmp_path and overrides applied."""

    def _make(**overrides) -> AppConfig:
        data = {
            "error_log": str(tmp_path / "error.log"),
            "run_log": str(tmp_path / "run.log"),
            **overrides,
        }
        return AppConfig.model_validate(data)

    return _make
