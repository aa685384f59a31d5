"""Tests for the file, SQLite and static input sources."""

from __future__ import annotations

import json
import sqlite3
from pathlib import Path

import pytest

from hosterprobe.domain.exceptions import InputSourceError
from hosterprobe.domain.ports import InputSourcePort
from hosterprobe.infrastructure.config import AppConfig
from hosterprobe.infrastructure.input_sources import (
    FileInputSource,
    SqliteInputSource,
    StaticInputSource,
    create_input_source,
)


class TestFileInputSource:
    def test_satisfies_port(self, tmp_path: Path) -> None:
        assert isinstance(FileInputSource(tmp_path / "x.yaml"), InputSourcePort)

    async def test_yaml_list(self, tmp_path: Path) -> None:
        path = tmp_path / "links.yaml"
        path.write_text(
            "- link: https://a.test/1\n  title: One\n- https://a.test/2\n",
            encoding="utf-8",
        )

        batch = await FileInputSource(path).get_download_links()

        assert batch.link_field == "link"
        assert batch.records == [
            {"link": "https://a.test/1", "title": "One"},
            {"link": "https://a.test/2"},
        ]

    async def test_mapping_names_link_field(self, tmp_path: Path) -> None:
        path = tmp_path / "links.json"
        path.write_text(
            json.dumps({"link_field": "url", "links": [{"url": "https://a.test/1"}]}),
            encoding="utf-8",
        )

        batch = await FileInputSource(path).get_download_links()

        assert batch.link_field == "url"
        assert batch.records == [{"url": "https://a.test/1"}]

    async def test_csv(self, tmp_path: Path) -> None:
        path = tmp_path / "links.csv"
        path.write_text(
            "download,title\nhttps://a.test/1,One\nhttps://a.test/2,Two\n",
            encoding="utf-8",
        )

        batch = await FileInputSource(path, link_field="download").get_download_links()

        assert batch.link_field == "download"
        assert [r["download"] for r in batch.records] == [
            "https://a.test/1",
            "https://a.test/2",
        ]
        assert batch.records[1]["title"] == "Two"

    async def test_empty_document(self, tmp_path: Path) -> None:
        path = tmp_path / "links.yaml"
        path.write_text("", encoding="utf-8")
        assert len(await FileInputSource(path).get_download_links()) == 0

    async def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(InputSourceError, match="Cannot read"):
            await FileInputSource(tmp_path / "nope.yaml").get_download_links()

    async def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "links.yaml"
        path.write_text("- [unclosed\n", encoding="utf-8")
        with pytest.raises(InputSourceError, match="cannot parse"):
            await FileInputSource(path).get_download_links()

    async def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "links.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(InputSourceError):
            await FileInputSource(path).get_download_links()

    async def test_wrong_shape(self, tmp_path: Path) -> None:
        path = tmp_path / "links.yaml"
        path.write_text("links: just-a-string\n", encoding="utf-8")
        with pytest.raises(InputSourceError, match="expected a list"):
            await FileInputSource(path).get_download_links()

    async def test_bad_entry(self, tmp_path: Path) -> None:
        path = tmp_path / "links.yaml"
        path.write_text("- 42\n", encoding="utf-8")
        with pytest.raises(InputSourceError, match="entry 0"):
            await FileInputSource(path).get_download_links()


@pytest.fixture()
def links_db(tmp_path: Path) -> Path:
    path = tmp_path / "links.db"
    conn = sqlite3.connect(path)
    conn.execute("CREATE TABLE downloads (id INTEGER, link TEXT, title TEXT)")
    conn.executemany(
        "INSERT INTO downloads VALUES (?, ?, ?)",
        [(1, "https://a.test/1", "One"), (2, "https://a.test/2", "Two")],
    )
    conn.commit()
    conn.close()
    return path


class TestSqliteInputSource:
    async def test_rows_as_records(self, links_db: Path) -> None:
        source = SqliteInputSource(
            links_db, "SELECT id, link, title FROM downloads ORDER BY id"
        )

        batch = await source.get_download_links()

        assert batch.link_field == "link"
        assert batch.records == [
            {"id": 1, "link": "https://a.test/1", "title": "One"},
            {"id": 2, "link": "https://a.test/2", "title": "Two"},
        ]

    async def test_read_only(self, links_db: Path) -> None:
        source = SqliteInputSource(links_db, "DELETE FROM downloads")
        with pytest.raises(InputSourceError, match="Query failed"):
            await source.get_download_links()

    async def test_bad_query(self, links_db: Path) -> None:
        source = SqliteInputSource(links_db, "SELECT * FROM missing_table")
        with pytest.raises(InputSourceError, match="Query failed"):
            await source.get_download_links()

    async def test_missing_link_column(self, links_db: Path) -> None:
        source = SqliteInputSource(links_db, "SELECT id FROM downloads")
        with pytest.raises(InputSourceError, match="no column"):
            await source.get_download_links()

    async def test_missing_database(self, tmp_path: Path) -> None:
        source = SqliteInputSource(tmp_path / "none.db", "SELECT 1")
        with pytest.raises(InputSourceError, match="not found"):
            await source.get_download_links()
        assert not (tmp_path / "none.db").exists()


class TestStaticInputSource:
    async def test_wraps_urls(self) -> None:
        batch = await StaticInputSource(
            ["https://a.test/1", "https://a.test/2"]
        ).get_download_links()
        assert batch.records == [{"link": "https://a.test/1"}, {"link": "https://a.test/2"}]


class TestCreateInputSource:
    def test_file(self, tmp_path: Path) -> None:
        config = AppConfig.model_validate({"input": {"path": str(tmp_path / "l.yaml")}})
        assert isinstance(create_input_source(config), FileInputSource)

    def test_sqlite(self, tmp_path: Path) -> None:
        config = AppConfig.model_validate(
            {
                "input": {
                    "source": "sqlite",
                    "path": str(tmp_path / "l.db"),
                    "query": "SELECT link FROM t",
                }
            }
        )
        assert isinstance(create_input_source(config), SqliteInputSource)

    def test_no_path(self) -> None:
        with pytest.raises(InputSourceError, match="No input configured"):
            create_input_source(AppConfig())
