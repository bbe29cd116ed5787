"""
Import a bookmark array exported from the browser extension's storage into
the configured store. Records whose id is already present are skipped.
"""

import asyncio
import json
import logging
from pathlib import Path

from pydantic import ValidationError as SchemaError

from ytmarks.core.config import settings
from ytmarks.crud.bookmark import BookmarkStore
from ytmarks.db.factory import build_store
from ytmarks.models.bookmark import Bookmark

logger = logging.getLogger(__name__)


async def import_records(store: BookmarkStore, records: list) -> int:
    bookmarks = []
    for record in records:
        try:
            bookmarks.append(Bookmark.model_validate(record))
        except SchemaError as e:
            logger.warning(f"Skipping malformed record {record!r}: {e}")

    added = await store.merge(bookmarks)
    return len(added)


async def import_file(path: Path):
    if settings.STORAGE_BACKEND == "database":
        from ytmarks.db.database import init_db

        await init_db()

    records = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(records, dict):
        # A full chrome.storage.local dump
        records = records.get("bookmarks", [])

    count = await import_records(build_store(settings), records)
    print(f"Imported {count} bookmark(s) from {path}")


if __name__ == "__main__":
    import sys
    asyncio.run(import_file(Path(sys.argv[1])))
