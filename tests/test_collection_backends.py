import json
import pytest

from ytmarks.core.exceptions import PersistenceError
from ytmarks.crud.bookmark import BookmarkStore
from ytmarks.db.collection import JsonFileCollection, StorageAreaCollection
from ytmarks.db.storage import MemoryStorageArea

RECORDS = [
    {
        "id": 1700000000000,
        "videoId": "abc123",
        "timestamp": 42,
        "description": "intro",
        "createdAt": "2023-11-14T22:13:20.000Z",
        "videoTitle": None,
    },
    {
        "id": 1700000000500,
        "videoId": "xyz789",
        "timestamp": 3.5,
        "description": "",
        "createdAt": "2023-11-14T22:13:20.500Z",
        "videoTitle": "Some talk",
    },
]


@pytest.mark.asyncio
class TestJsonFileCollection:

    async def test_missing_file_loads_as_empty(self, tmp_path):
        backend = JsonFileCollection(tmp_path / "bookmarks.json")
        assert await backend.load() == []

    async def test_save_writes_pretty_printed_array(self, tmp_path):
        path = tmp_path / "bookmarks.json"
        backend = JsonFileCollection(path)

        await backend.save(RECORDS)

        assert path.read_text(encoding="utf-8") == json.dumps(RECORDS, indent=2)
        assert await backend.load() == RECORDS

    async def test_invalid_json_raises_persistence_error(self, tmp_path):
        path = tmp_path / "bookmarks.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(PersistenceError):
            await JsonFileCollection(path).load()

    async def test_undecodable_file_raises_persistence_error(self, tmp_path):
        path = tmp_path / "bookmarks.json"
        path.write_bytes(b"\xff\xfe[]")

        with pytest.raises(PersistenceError):
            await JsonFileCollection(path).load()

    async def test_non_array_document_raises_persistence_error(self, tmp_path):
        path = tmp_path / "bookmarks.json"
        path.write_text('{"bookmarks": []}', encoding="utf-8")

        with pytest.raises(PersistenceError):
            await JsonFileCollection(path).load()

    async def test_unreadable_path_raises_persistence_error(self, tmp_path):
        # A directory where the file should be is a read failure, not "absent"
        path = tmp_path / "bookmarks.json"
        path.mkdir()

        with pytest.raises(PersistenceError):
            await JsonFileCollection(path).load()

    async def test_write_failure_raises_persistence_error(self, tmp_path):
        backend = JsonFileCollection(tmp_path / "missing-dir" / "bookmarks.json")

        assert await backend.load() == []
        with pytest.raises(PersistenceError):
            await backend.save(RECORDS)

    async def test_store_surfaces_write_failure(self, tmp_path):
        store = BookmarkStore(JsonFileCollection(tmp_path / "missing-dir" / "bookmarks.json"))

        with pytest.raises(PersistenceError):
            await store.create("abc123", 1)

    async def test_malformed_record_raises_persistence_error(self, tmp_path):
        path = tmp_path / "bookmarks.json"
        path.write_text(json.dumps([{"videoId": "abc123"}]), encoding="utf-8")

        with pytest.raises(PersistenceError):
            await BookmarkStore(JsonFileCollection(path)).list("abc123")

    async def test_unknown_keys_survive_rewrite(self, tmp_path):
        path = tmp_path / "bookmarks.json"
        record = dict(RECORDS[0], color="red")
        path.write_text(json.dumps([record]), encoding="utf-8")
        store = BookmarkStore(JsonFileCollection(path))

        await store.update(record["id"], "changed")

        saved = json.loads(path.read_text(encoding="utf-8"))
        assert saved == [dict(record, description="changed")]


@pytest.mark.asyncio
class TestStorageAreaCollection:

    async def test_empty_area_loads_as_empty(self):
        assert await StorageAreaCollection(MemoryStorageArea()).load() == []

    async def test_round_trip_under_bookmarks_key(self):
        area = MemoryStorageArea()
        backend = StorageAreaCollection(area)

        await backend.save(RECORDS)

        assert await area.get({"bookmarks": []}) == {"bookmarks": RECORDS}
        assert await backend.load() == RECORDS

    async def test_custom_key(self):
        area = MemoryStorageArea({"bookmarks": ["untouched"]})
        backend = StorageAreaCollection(area, key="archived")

        await backend.save(RECORDS[:1])

        assert await area.get({"bookmarks": None}) == {"bookmarks": ["untouched"]}
        assert await backend.load() == RECORDS[:1]

    async def test_non_array_value_raises_persistence_error(self):
        area = MemoryStorageArea({"bookmarks": {"oops": True}})

        with pytest.raises(PersistenceError):
            await StorageAreaCollection(area).load()

    async def test_store_reads_extension_records(self):
        area = MemoryStorageArea({"bookmarks": RECORDS})
        store = BookmarkStore(StorageAreaCollection(area))

        bookmarks = await store.list("xyz789")

        assert len(bookmarks) == 1
        assert bookmarks[0].video_title == "Some talk"
        assert bookmarks[0].timestamp == 3.5
