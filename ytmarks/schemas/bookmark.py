from pydantic import BaseModel, Field
from typing import List, Optional

from ytmarks.models.bookmark import Seconds


class BookmarkCreate(BaseModel):
    # Presence is checked by the store so a missing field answers 400, not 422
    video_id: Optional[str] = Field(default=None, alias="videoId")
    timestamp: Optional[Seconds] = None
    description: Optional[str] = None

    class Config:
        populate_by_name = True


class BookmarkUpdate(BaseModel):
    description: Optional[str] = None


class BookmarkRead(BaseModel):
    id: int
    video_id: str = Field(alias="videoId")
    timestamp: Seconds
    description: Optional[str] = None
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    video_title: Optional[str] = Field(default=None, alias="videoTitle")

    class Config:
        from_attributes = True
        populate_by_name = True


class BookmarkEntry(BookmarkRead):
    label: str
    jump_url: str = Field(alias="jumpUrl")


class VideoBookmarksRead(BaseModel):
    video_id: str = Field(alias="videoId")
    video_title: str = Field(alias="videoTitle")
    watch_url: str = Field(alias="watchUrl")
    bookmarks: List[BookmarkEntry]

    class Config:
        populate_by_name = True
