"""Result handler implementations, selected by name from configuration."""

from __future__ import annotations

import httpx

from hosterprobe.domain.ports import ResultHandlerPort
from hosterprobe.infrastructure.config import AppConfig

from .console import ConsoleResultHandler
from .slack import SlackResultHandler


def create_result_handler(
    config: AppConfig,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> ResultHandlerPort:
    """Build the configured result handler.

    The slack handler needs ``http_client``; its lifetime is owned by the caller.
    """
    settings = config.result_handler
    if settings.name == "slack":
        if http_client is None:
            raise ValueError("slack result handler requires an http_client")
        return SlackResultHandler(
            http_client,
            settings.slack_webhook_url or "",
            notify_alive=settings.notify_alive,
        )
    return ConsoleResultHandler()


__all__ = [
    "ConsoleResultHandler",
    "SlackResultHandler",
    "create_result_handler",
]
