from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from vidtube.core.auth import get_current_user
from vidtube.core.database import get_db
from vidtube.models.user import User
from vidtube.schemas.base import ApiResponse
from vidtube.schemas.like import LikeStatusOut
from vidtube.schemas.video import VideoSummaryOut
from vidtube.services import likes as like_service

router = APIRouter(prefix="/likes", tags=["likes"])


@router.post("/toggle/v/{video_id}", response_model=ApiResponse[LikeStatusOut])
def toggle_video_like(
    video_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    out = like_service.toggle_video_like(db, video_id, user)
    message = "Video liked successfully" if out.is_liked else "Video unliked successfully"
    return ApiResponse.ok(out, message)


@router.post("/toggle/c/{comment_id}", response_model=ApiResponse[LikeStatusOut])
def toggle_comment_like(
    comment_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    out = like_service.toggle_comment_like(db, comment_id, user)
    message = "Comment liked successfully" if out.is_liked else "Comment unliked successfully"
    return ApiResponse.ok(out, message)


@router.get("/videos", response_model=ApiResponse[List[VideoSummaryOut]])
def get_liked_videos(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    videos = like_service.list_liked_videos(db, user)
    if not videos:
        return ApiResponse.ok([], "User hasn't liked any videos")
    return ApiResponse.ok(videos, "Liked videos fetched successfully")
