"""Test doubles shared by unit and integration tests."""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

import httpx

from hosterprobe.domain.entities import ProviderDescriptor, Redirect, RequestSpec, Verdict


class FakeTransport:
    """Probe transport that answers from a callable and records every request.

    ``responder`` receives the ``RequestSpec`` and returns a status code or
    an ``httpx.Response``; raising simulates a transport failure.
    """

    def __init__(self, responder: Callable[[RequestSpec], Any] | None = None) -> None:
        self._responder = responder or (lambda spec: 200)
        self.requests: list[RequestSpec] = []
        self.closed = False

    async def send(self, spec: RequestSpec) -> httpx.Response:
        self.requests.append(spec)
        answer = self._responder(spec)
        if isinstance(answer, httpx.Response):
            return answer
        return httpx.Response(answer, request=httpx.Request(spec.method, spec.url))

    async def aclose(self) -> None:
        self.closed = True


def make_provider(
    name: str,
    *hosts: str,
    verify: Callable[[httpx.Response], Verdict | Redirect] | None = None,
    patterns: tuple[str, ...] = (),
) -> ProviderDescriptor:
    """Provider that calls ``verify`` (alive on any response by default)."""
    return ProviderDescriptor(
        name=name,
        host_names=frozenset(hosts),
        host_patterns=tuple(re.compile(p) for p in patterns),
        verify=verify or _alive,
    )


def _alive(resp: httpx.Response) -> Verdict:
    return Verdict(alive=True, status_code=resp.status_code)
