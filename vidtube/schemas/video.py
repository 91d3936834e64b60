from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from vidtube.schemas.base import CamelModel
from vidtube.schemas.user import OwnerOut


class VideoSummaryOut(CamelModel):
    id: str
    title: str
    description: str
    video_file: str
    thumbnail: str
    duration: float
    views: int
    is_published: bool
    created_at: datetime
    owner: Optional[OwnerOut] = None


class VideoDetailOut(VideoSummaryOut):
    updated_at: datetime


class VideoListOut(CamelModel):
    videos: List[VideoSummaryOut]


class VideoDeleteOut(CamelModel):
    video_id: str
    deleted_likes: int
    deleted_comments: int


class PublishStatusOut(CamelModel):
    is_published: bool
