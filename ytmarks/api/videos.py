import logging
from fastapi import APIRouter, Depends, Response, status
from typing import Dict

from ytmarks.api.deps import get_titles
from ytmarks.core.exceptions import CustomHTTPException, StoreError
from ytmarks.crud.video_title import VideoTitleCache
from ytmarks.schemas.video import VideoTitleRead, VideoTitleUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/videos", tags=["videos"])


@router.get("/titles", response_model=Dict[str, str])
async def list_video_titles(titles: VideoTitleCache = Depends(get_titles)):
    try:
        return await titles.all()
    except StoreError as e:
        raise CustomHTTPException.from_store_error(e)


@router.get("/{video_id}/title", response_model=VideoTitleRead)
async def get_video_title(video_id: str, titles: VideoTitleCache = Depends(get_titles)):
    """Cached title for a video, or a generic placeholder"""
    try:
        return VideoTitleRead(video_id=video_id, title=await titles.display_title(video_id))
    except StoreError as e:
        raise CustomHTTPException.from_store_error(e)


@router.put("/{video_id}/title", response_model=VideoTitleRead)
async def set_video_title(
    video_id: str,
    title_in: VideoTitleUpdate,
    titles: VideoTitleCache = Depends(get_titles)
):
    try:
        title = await titles.set(video_id, title_in.title.strip())
        return VideoTitleRead(video_id=video_id, title=title)
    except StoreError as e:
        raise CustomHTTPException.from_store_error(e)


@router.delete("/{video_id}/title", status_code=status.HTTP_204_NO_CONTENT)
async def remove_video_title(video_id: str, titles: VideoTitleCache = Depends(get_titles)):
    try:
        await titles.remove(video_id)
    except StoreError as e:
        raise CustomHTTPException.from_store_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
