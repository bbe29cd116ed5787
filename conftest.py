import pytest
import pytest_asyncio
from datetime import datetime, timedelta, timezone
from httpx import AsyncClient, ASGITransport

from ytmarks.api.deps import get_store
from ytmarks.crud.bookmark import BookmarkStore
from ytmarks.crud.video_title import VideoTitleCache
from ytmarks.db.collection import JsonFileCollection, StorageAreaCollection
from ytmarks.db.storage import JsonFileStorageArea, MemoryStorageArea
from ytmarks.main import app


class FrozenClock:
    """Clock that only moves when told to."""
    def __init__(self, start: datetime = None):
        self.now = start or datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def storage_area():
    return MemoryStorageArea()


@pytest.fixture
def memory_store(storage_area, clock):
    """Store over an in-memory storage area, titles kept in the same area."""
    return BookmarkStore(
        StorageAreaCollection(storage_area),
        titles=VideoTitleCache(storage_area),
        clock=clock,
    )


@pytest.fixture
def bookmarks_file(tmp_path):
    return tmp_path / "bookmarks.json"


@pytest.fixture
def file_store(bookmarks_file, tmp_path, clock):
    """Store over a JSON file in a temporary directory."""
    return BookmarkStore(
        JsonFileCollection(bookmarks_file),
        titles=VideoTitleCache(JsonFileStorageArea(tmp_path / "storage.json")),
        clock=clock,
    )


@pytest_asyncio.fixture
async def client(file_store):
    """HTTP client wired to a file-backed store."""
    app.dependency_overrides[get_store] = lambda: file_store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides = {}
