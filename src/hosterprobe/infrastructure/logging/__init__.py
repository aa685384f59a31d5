from __future__ import annotations

from .setup import RUN_LOGGER_NAME, configure_logging, shutdown_logging

__all__ = [
    "RUN_LOGGER_NAME",
    "configure_logging",
    "shutdown_logging",
]
