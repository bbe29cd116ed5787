from pydantic import BaseModel, Field


class VideoTitleUpdate(BaseModel):
    title: str


class VideoTitleRead(BaseModel):
    video_id: str = Field(alias="videoId")
    title: str

    class Config:
        populate_by_name = True
