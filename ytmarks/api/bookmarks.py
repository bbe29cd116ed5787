import logging
from fastapi import APIRouter, Depends, status
from typing import List

from ytmarks.api.deps import get_store
from ytmarks.core.exceptions import CustomHTTPException, StoreError
from ytmarks.crud.bookmark import BookmarkStore
from ytmarks.schemas.bookmark import (
    BookmarkCreate,
    BookmarkEntry,
    BookmarkRead,
    BookmarkUpdate,
    VideoBookmarksRead,
)
from ytmarks.utils.timestamps import format_timestamp, watch_url

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])


@router.get("", response_model=List[VideoBookmarksRead])
async def list_bookmarks_by_video(store: BookmarkStore = Depends(get_store)):
    """All bookmarks grouped per video, each group sorted by timestamp"""
    try:
        groups = await store.group_by_video()
    except StoreError as e:
        logger.error(f"Error listing bookmarks: {e}")
        raise CustomHTTPException.from_store_error(e)

    return [
        VideoBookmarksRead(
            video_id=group.video_id,
            video_title=group.video_title,
            watch_url=watch_url(group.video_id),
            bookmarks=[
                BookmarkEntry.model_validate({
                    **bookmark.to_record(),
                    "label": format_timestamp(bookmark.timestamp),
                    "jumpUrl": watch_url(group.video_id, bookmark.timestamp),
                })
                for bookmark in group.bookmarks
            ],
        )
        for group in groups
    ]


@router.get("/{video_id}", response_model=List[BookmarkRead])
async def get_video_bookmarks(video_id: str, store: BookmarkStore = Depends(get_store)):
    """Fetch all bookmarks for a specific video"""
    try:
        return await store.list(video_id)
    except StoreError as e:
        logger.error(f"Error fetching bookmarks for video {video_id}: {e}")
        raise CustomHTTPException.from_store_error(e)


@router.post("", response_model=BookmarkRead, status_code=status.HTTP_201_CREATED)
async def add_bookmark(bookmark_in: BookmarkCreate, store: BookmarkStore = Depends(get_store)):
    try:
        return await store.create(
            bookmark_in.video_id,
            bookmark_in.timestamp,
            bookmark_in.description,
        )
    except StoreError as e:
        raise CustomHTTPException.from_store_error(e)


@router.put("/{bookmark_id}", response_model=BookmarkRead)
async def edit_bookmark(
    bookmark_id: int,
    bookmark_in: BookmarkUpdate,
    store: BookmarkStore = Depends(get_store)
):
    try:
        return await store.update(bookmark_id, bookmark_in.description)
    except StoreError as e:
        raise CustomHTTPException.from_store_error(e)


@router.delete("/{bookmark_id}", response_model=BookmarkRead)
async def remove_bookmark(bookmark_id: int, store: BookmarkStore = Depends(get_store)):
    """Remove a bookmark and return it"""
    try:
        return await store.delete(bookmark_id)
    except StoreError as e:
        raise CustomHTTPException.from_store_error(e)
