from fastapi import Depends, Request

from ytmarks.crud.bookmark import BookmarkStore
from ytmarks.crud.video_title import VideoTitleCache
from ytmarks.core.exceptions import CustomHTTPException


def get_store(request: Request) -> BookmarkStore:
    """
    Bookmark store dependency, built once per process in the app lifespan.
    Usage:
    async def some_endpoint(store: BookmarkStore = Depends(get_store)):
        ...
    """
    return request.app.state.store


def get_titles(store: BookmarkStore = Depends(get_store)) -> VideoTitleCache:
    titles = store.titles
    if titles is None:
        raise CustomHTTPException(status_code=501, detail="Video titles are not available for this store")
    return titles
