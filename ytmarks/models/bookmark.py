from pydantic import BaseModel, Field, confloat
from typing import Optional, Union

# Whole or fractional seconds; NaN and infinities cannot be sorted or formatted
Seconds = Union[int, confloat(allow_inf_nan=False)]


class Bookmark(BaseModel):
    """A saved timestamp (in seconds) within a video, as held in the collection."""
    id: int
    video_id: str = Field(alias="videoId")
    timestamp: Seconds
    description: Optional[str] = ""
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    video_title: Optional[str] = Field(default=None, alias="videoTitle")

    class Config:
        populate_by_name = True
        # Keys written by other clients survive a read-modify-write cycle
        extra = "allow"

    def to_record(self) -> dict:
        return self.model_dump(by_alias=True)
