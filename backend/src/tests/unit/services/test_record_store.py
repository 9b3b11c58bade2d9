"""
Unit tests for the record store: loading, validation and single initialization.
"""

import asyncio
import json

import pytest

from teamsbot.core.exceptions import DataSourceError
from teamsbot.services.record_store import InMemoryDataSource, JsonFileDataSource, RecordStore, load


class CountingSource(InMemoryDataSource):
    """In-memory source that records how often it was read."""

    def __init__(self, document):
        super().__init__(document, description="counting")
        self.reads = 0

    def read(self):
        self.reads += 1
        return super().read()


class TestLoad:
    def test_records_keep_document_order(self, avengers_document):
        records = load(InMemoryDataSource(avengers_document))

        assert [r.name for r in records] == ["Iron Man", "Iron Monger", "Thor", "Vision"]
        assert records[0].real_name == "Tony Stark"
        assert records[0].profile_link == "https://x/ironman"

    def test_absent_image_loads_as_none(self, avengers_document):
        records = load(InMemoryDataSource(avengers_document))
        assert records[3].image_url is None

    def test_duplicates_are_kept(self, iron_man_document):
        iron_man_document["characters"].append(dict(iron_man_document["characters"][0]))
        assert len(load(InMemoryDataSource(iron_man_document))) == 2

    def test_records_are_immutable(self, iron_man_document):
        record = load(InMemoryDataSource(iron_man_document))[0]
        with pytest.raises(Exception):
            record.name = "War Machine"

    def test_reads_json_file(self, tmp_path, avengers_document):
        path = tmp_path / "avengers.json"
        path.write_text(json.dumps(avengers_document), encoding="utf-8")

        records = load(JsonFileDataSource(path))

        assert len(records) == 4

    def test_missing_file(self, tmp_path):
        with pytest.raises(DataSourceError, match="file not found") as exc_info:
            load(JsonFileDataSource(tmp_path / "nope.json"))
        assert exc_info.value.error_code == "DATA_SOURCE_ERROR"

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text('{"characters": [', encoding="utf-8")

        with pytest.raises(DataSourceError, match="invalid JSON"):
            load(JsonFileDataSource(path))

    def test_missing_characters_key(self):
        with pytest.raises(DataSourceError, match="malformed document"):
            load(InMemoryDataSource({"heroes": []}))

    def test_one_bad_record_fails_whole_load(self, avengers_document):
        del avengers_document["characters"][2]["link"]

        with pytest.raises(DataSourceError) as exc_info:
            load(InMemoryDataSource(avengers_document))
        assert exc_info.value.details["path"] == "characters/2"

    def test_wrong_field_type(self, iron_man_document):
        iron_man_document["characters"][0]["actor"] = 42

        with pytest.raises(DataSourceError):
            load(InMemoryDataSource(iron_man_document))


class TestRecordStore:
    @pytest.mark.asyncio
    async def test_loads_once(self, avengers_document):
        source = CountingSource(avengers_document)
        store = RecordStore(source)

        first = await store.get_records()
        second = await store.get_records()

        assert first is second
        assert source.reads == 1
        assert store.is_loaded

    @pytest.mark.asyncio
    async def test_concurrent_first_callers_share_one_load(self, avengers_document):
        source = CountingSource(avengers_document)
        store = RecordStore(source)

        results = await asyncio.gather(*(store.get_records() for _ in range(10)))

        assert source.reads == 1
        assert all(r is results[0] for r in results)

    @pytest.mark.asyncio
    async def test_failed_load_is_retried(self, tmp_path, iron_man_document):
        path = tmp_path / "avengers.json"
        store = RecordStore(JsonFileDataSource(path))

        with pytest.raises(DataSourceError):
            await store.get_records()
        assert not store.is_loaded

        # Fixing the source is picked up by the next call
        path.write_text(json.dumps(iron_man_document), encoding="utf-8")
        records = await store.get_records()

        assert [r.name for r in records] == ["Iron Man"]

    @pytest.mark.asyncio
    async def test_preload_returns_count(self, avengers_document):
        store = RecordStore(InMemoryDataSource(avengers_document))
        assert await store.preload() == 4

    @pytest.mark.asyncio
    async def test_reset_forces_reload(self, avengers_document):
        source = CountingSource(avengers_document)
        store = RecordStore(source)

        await store.get_records()
        store.reset()
        await store.get_records()

        assert source.reads == 2
