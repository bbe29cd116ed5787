import asyncio
from typing import Optional

from ytmarks.core.config import settings
from ytmarks.db.factory import build_store
from ytmarks.utils.timestamps import extract_video_id, format_timestamp, watch_url


async def list_bookmarks(video_id: Optional[str] = None):
    if settings.STORAGE_BACKEND == "database":
        from ytmarks.db.database import init_db

        await init_db()

    store = build_store(settings)
    groups = await store.group_by_video()
    if video_id:
        groups = [group for group in groups if group.video_id == video_id]

    if not groups:
        print("No bookmarks saved yet")
        return

    for group in groups:
        print(f"{group.video_title} ({watch_url(group.video_id)})")
        for bookmark in group.bookmarks:
            print(f"  {format_timestamp(bookmark.timestamp)}  {bookmark.description or 'No description'}")
            print(f"         {watch_url(group.video_id, bookmark.timestamp)}")


if __name__ == "__main__":
    import sys
    video_id = None
    if len(sys.argv) > 1:
        # Accepts a bare video id or a watch URL
        video_id = extract_video_id(sys.argv[1]) or sys.argv[1]
    asyncio.run(list_bookmarks(video_id))
