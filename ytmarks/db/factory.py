"""
Builds the bookmark store for the configured storage backend.
"""

import logging

from ytmarks.core.config import Settings
from ytmarks.crud.bookmark import BookmarkStore
from ytmarks.crud.video_title import VideoTitleCache
from ytmarks.db.collection import JsonFileCollection, StorageAreaCollection
from ytmarks.db.storage import JsonFileStorageArea, MemoryStorageArea, DatabaseStorageArea

logger = logging.getLogger(__name__)


def build_store(config: Settings) -> BookmarkStore:
    if config.STORAGE_BACKEND == "file":
        backend = JsonFileCollection(config.BOOKMARKS_FILE)
        titles = VideoTitleCache(JsonFileStorageArea(config.STORAGE_FILE))
    elif config.STORAGE_BACKEND == "memory":
        area = MemoryStorageArea()
        backend = StorageAreaCollection(area)
        titles = VideoTitleCache(area)
    else:
        from ytmarks.db.database import AsyncSessionLocal

        area = DatabaseStorageArea(AsyncSessionLocal)
        backend = StorageAreaCollection(area)
        titles = VideoTitleCache(area)

    logger.info(f"Bookmark store using {backend.describe()}")
    return BookmarkStore(backend, titles=titles)
