import logging
from typing import Dict, Optional

from ytmarks.core import error_codes
from ytmarks.core.exceptions import NotFoundError, ValidationError
from ytmarks.db.storage import StorageArea

logger = logging.getLogger(__name__)

VIDEO_TITLES_KEY = "videoTitles"


def fallback_title(video_id: str) -> str:
    return f"Video: {video_id}"


class VideoTitleCache:
    """Cached display titles keyed by video id, stored under one storage key."""

    def __init__(self, area: StorageArea, key: str = VIDEO_TITLES_KEY):
        self.area = area
        self.key = key

    async def all(self) -> Dict[str, str]:
        result = await self.area.get({self.key: {}})
        return result[self.key]

    async def get(self, video_id: str) -> Optional[str]:
        titles = await self.all()
        return titles.get(video_id)

    async def display_title(self, video_id: str) -> str:
        return await self.get(video_id) or fallback_title(video_id)

    async def set(self, video_id: str, title: str) -> str:
        if not video_id or not title:
            raise ValidationError("videoId and title are required.")

        titles = await self.all()
        titles[video_id] = title
        await self.area.set({self.key: titles})
        logger.info(f"Cached title for video {video_id}")
        return title

    async def remove(self, video_id: str) -> str:
        titles = await self.all()
        if video_id not in titles:
            raise NotFoundError("Video title not found.", error_code=error_codes.VIDEO_TITLE_NOT_FOUND)

        title = titles.pop(video_id)
        await self.area.set({self.key: titles})
        return title
