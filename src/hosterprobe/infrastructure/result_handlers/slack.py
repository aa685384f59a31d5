"""Slack result handler: posts outcomes to an incoming webhook.

Dead links and errors are always posted.  Alive links are posted only when
``notify_alive`` is set, so a healthy catalog does not flood the channel.

Webhook payload:
    POST {webhook_url}  {"text": "...", "attachments": [{"color": ..., "fields": [...]}]}
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from hosterprobe.domain.entities import LinkRecord, Verdict
from hosterprobe.domain.exceptions import ResultHandlerError

log = structlog.get_logger(__name__)

_COLOR_ALIVE = "good"
_COLOR_DEAD = "danger"
_COLOR_ERROR = "warning"

# Record attributes shown as attachment fields, when present.
_SKIPPED_ATTRIBUTES = frozenset({"url"})


def _fields(record: LinkRecord) -> list[dict[str, Any]]:
    fields = [
        {"title": key, "value": str(value), "short": True}
        for key, value in record.attributes.items()
        if key not in _SKIPPED_ATTRIBUTES and value not in (None, "")
    ]
    if record.provider:
        fields.append({"title": "provider", "value": record.provider, "short": True})
    if record.redirected and record.final_url:
        fields.append({"title": "final_url", "value": record.final_url, "short": False})
    return fields


class SlackResultHandler:
    """Publishes outcomes to a Slack incoming webhook."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        webhook_url: str,
        *,
        notify_alive: bool = False,
    ) -> None:
        self._http = http_client
        self._webhook_url = webhook_url
        self._notify_alive = notify_alive

    @property
    def name(self) -> str:
        return "slack"

    async def handle_result(self, record: LinkRecord, verdict: Verdict) -> None:
        if verdict.alive and not self._notify_alive:
            log.debug("slack_alive_skipped", url=record.url)
            return
        state = "alive" if verdict.alive else "dead"
        text = f"Link {state}: {record.url}"
        if verdict.reason:
            text += f" ({verdict.reason})"
        await self._post(
            {
                "text": text,
                "attachments": [
                    {
                        "color": _COLOR_ALIVE if verdict.alive else _COLOR_DEAD,
                        "fields": _fields(record),
                    }
                ],
            },
            url=record.url,
        )

    async def handle_error(self, message: str, record: LinkRecord) -> None:
        await self._post(
            {
                "text": f"{message} {record.url}",
                "attachments": [{"color": _COLOR_ERROR, "fields": _fields(record)}],
            },
            url=record.url,
        )

    async def _post(self, payload: dict[str, Any], *, url: str) -> None:
        try:
            resp = await self._http.post(self._webhook_url, json=payload)
        except httpx.HTTPError as exc:
            raise ResultHandlerError(f"Slack webhook request failed: {exc}") from exc

        if not resp.is_success:
            raise ResultHandlerError(
                f"Slack webhook answered HTTP {resp.status_code}: {resp.text[:200]}"
            )
        log.debug("slack_message_posted", url=url)
