"""End-to-end batch runs: real transport, provider catalog and input sources.

HTTP is intercepted with respx; no request leaves the process.
"""

from __future__ import annotations

import json

import httpx
import pytest
import respx
from structlog.testing import capture_logs

from hosterprobe.domain.entities import LinkOutcome
from hosterprobe.infrastructure.providers.mediafire import API_URL
from hosterprobe.interfaces.composition import build_runtime, run_batch

pytestmark = pytest.mark.integration

_MEDIAFIRE = "https://www.mediafire.com/file/abc123/movie.mkv/file"
_GO4UP = "https://go4up.com/dl/abc123"
_RAPIDGATOR = "https://rapidgator.net/file/xyz789/movie.mkv.html"
_DROPBOX = "https://www.dropbox.com/s/gone/file.zip"
_UNKNOWN = "https://unknown-host.test/f2"
_WEBHOOK = "https://hooks.slack.test/services/T000/B000/XXX"


def _mock_hosters(router: respx.MockRouter) -> None:
    router.get(API_URL).respond(
        200,
        json={"response": {"result": "Success", "file_info": {"filename": "movie.mkv"}}},
    )
    router.get(_GO4UP).respond(302, headers={"Location": _RAPIDGATOR})
    router.get(_RAPIDGATOR).respond(200, text="<h1>movie.mkv</h1> Download")
    router.get(_DROPBOX).respond(404)


class TestConsoleBatch:
    async def test_mixed_batch(
        self, respx_mock, links_file, app_config, capsys
    ) -> None:
        _mock_hosters(respx_mock)
        path = links_file(
            [
                {"link": _MEDIAFIRE, "title": "mf"},
                {"link": _GO4UP, "title": "go"},
                {"link": _DROPBOX, "title": "db"},
                {"link": _UNKNOWN, "title": "unknown"},
                {"link": "https://unknown-host.test/f3", "title": "unknown again"},
            ]
        )
        config = app_config(input={"path": str(path)})

        with capture_logs() as logs:
            report = await run_batch(config)

        out = capsys.readouterr().out.splitlines()
        assert f"[ALIVE] {_MEDIAFIRE} provider=mediafire status=200" in out
        go4up_line = next(line for line in out if _GO4UP in line)
        assert go4up_line.startswith("[ALIVE]")
        assert f"final_url={_RAPIDGATOR}" in go4up_line
        assert "provider=rapidgator" in go4up_line
        assert any(line.startswith(f"[DEAD] {_DROPBOX}") for line in out)
        assert out.count(f"[ERROR] {_UNKNOWN} No support found for file service.") == 1
        assert not any("unknown-host.test/f3" in line for line in out)

        assert report.total == 5
        assert report.count(LinkOutcome.ALIVE) == 2
        assert report.count(LinkOutcome.DEAD) == 1
        assert report.count(LinkOutcome.UNSUPPORTED) == 1
        assert report.count(LinkOutcome.UNSUPPORTED_REPEAT) == 1

        summaries = [e for e in logs if e["event"] == "unsupported_services_summary"]
        assert len(summaries) == 1
        assert summaries[0]["unsupported_services"] == {"unknown-host.test": 2}

    async def test_cli_urls_bypass_input_source(self, respx_mock, app_config, capsys) -> None:
        _mock_hosters(respx_mock)
        report = await run_batch(app_config(), urls=[_MEDIAFIRE])
        assert report.count(LinkOutcome.ALIVE) == 1
        assert _MEDIAFIRE in capsys.readouterr().out

    async def test_transport_timeout_retried(self, respx_mock, app_config, capsys) -> None:
        route = respx_mock.get(_RAPIDGATOR)
        route.side_effect = [
            httpx.ConnectTimeout("timed out"),
            httpx.Response(200, text="movie.mkv"),
        ]

        report = await run_batch(app_config(retries=1), urls=[_RAPIDGATOR])

        assert route.call_count == 2
        assert report.count(LinkOutcome.ALIVE) == 1

    async def test_retries_exhausted_reports_nothing(
        self, respx_mock, app_config, capsys
    ) -> None:
        route = respx_mock.get(_RAPIDGATOR).respond(503)

        with capture_logs() as logs:
            report = await run_batch(app_config(retries=2), urls=[_RAPIDGATOR])

        assert route.call_count == 3
        assert report.count(LinkOutcome.RETRIES_EXHAUSTED) == 1
        assert capsys.readouterr().out == ""
        failed = [e for e in logs if e["event"] == "probe_failed"]
        assert failed[0]["url"] == _RAPIDGATOR

    async def test_unreadable_input_aborts(self, tmp_path, app_config, respx_mock) -> None:
        config = app_config(input={"path": str(tmp_path / "missing.yaml")})

        report = await run_batch(config)

        assert report.aborted is True
        assert respx_mock.calls.call_count == 0

    async def test_csv_input(self, tmp_path, respx_mock, app_config, capsys) -> None:
        _mock_hosters(respx_mock)
        path = tmp_path / "links.csv"
        path.write_text(f"url,title\n{_DROPBOX},db\n", encoding="utf-8")

        with capture_logs() as logs:
            await run_batch(app_config(input={"path": str(path), "link_field": "url"}))

        out = capsys.readouterr().out.splitlines()
        assert len(out) == 1
        assert out[0].startswith(f"[DEAD] {_DROPBOX}")
        assert any(e["event"] == "proxy_pool_loaded" for e in logs)


class TestSlackBatch:
    async def test_dead_links_and_errors_posted(self, respx_mock, app_config) -> None:
        _mock_hosters(respx_mock)
        webhook = respx_mock.post(_WEBHOOK).respond(200, text="ok")
        config = app_config(
            result_handler={"name": "slack", "slack_webhook_url": _WEBHOOK}
        )

        report = await run_batch(config, urls=[_MEDIAFIRE, _DROPBOX, _UNKNOWN])

        assert report.failed == 0
        texts = sorted(json.loads(call.request.content)["text"] for call in webhook.calls)
        assert texts == sorted(
            [
                f"Link dead: {_DROPBOX} (offline status)",
                f"No support found for file service. {_UNKNOWN}",
            ]
        )

    async def test_webhook_failure_is_per_link(self, respx_mock, app_config) -> None:
        _mock_hosters(respx_mock)
        respx_mock.post(_WEBHOOK).respond(500)
        config = app_config(
            result_handler={"name": "slack", "slack_webhook_url": _WEBHOOK}
        )

        with capture_logs() as logs:
            report = await run_batch(config, urls=[_DROPBOX, _MEDIAFIRE])

        assert report.failed == 1
        assert report.count(LinkOutcome.ALIVE) == 1
        failed = [e for e in logs if e["event"] == "link_handling_failed"]
        assert failed[0]["url"] == _DROPBOX
        assert failed[0]["error_type"] == "ResultHandlerError"


class TestRuntime:
    async def test_owned_transport_closed(self, app_config) -> None:
        async with build_runtime(app_config(), urls=[_MEDIAFIRE]) as runtime:
            transport = runtime.transport
            transport._client_for(None)  # noqa: SLF001
            assert transport._clients  # noqa: SLF001
        assert transport._clients == {}  # noqa: SLF001
