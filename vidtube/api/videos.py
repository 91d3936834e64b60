# vidtube/api/videos.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.orm import Session

from vidtube.core.auth import get_current_user
from vidtube.core.config import settings
from vidtube.core.database import get_db
from vidtube.models.user import User
from vidtube.schemas.base import ApiResponse
from vidtube.schemas.video import PublishStatusOut, VideoDeleteOut, VideoDetailOut, VideoListOut
from vidtube.services import videos as video_service
from vidtube.services.media_store import MediaStore, get_media_store
from vidtube.services.query import VideoListQuery
from vidtube.api.uploads import spooled

router = APIRouter(prefix="/videos", tags=["videos"])


@router.get("", response_model=ApiResponse[VideoListOut])
def list_videos(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    query: Optional[str] = Query(default=None, max_length=120),
    sort_by: Optional[str] = Query(default=None, alias="sortBy"),
    sort_type: Optional[str] = Query(default=None, alias="sortType"),
    user_id: Optional[str] = Query(default=None, alias="userId"),
    db: Session = Depends(get_db),
):
    q = VideoListQuery.from_params(
        query=query,
        user_id=user_id,
        sort_by=sort_by,
        sort_type=sort_type,
        page=page,
        limit=limit,
    )
    return ApiResponse.ok(video_service.list_videos(db, q), "Videos fetched successfully")


@router.post("", response_model=ApiResponse[VideoDetailOut], status_code=201)
def publish_video(
    title: Optional[str] = Form(default=None),
    description: Optional[str] = Form(default=None),
    video_file: Optional[UploadFile] = File(default=None, alias="videoFile"),
    thumbnail: Optional[UploadFile] = File(default=None),
    user: User = Depends(get_current_user),
    store: MediaStore = Depends(get_media_store),
    db: Session = Depends(get_db),
):
    with spooled(video_file, thumbnail) as (video_path, thumbnail_path):
        out = video_service.create_video(
            db,
            store,
            title=title,
            description=description,
            video_path=video_path,
            thumbnail_path=thumbnail_path,
            owner=user,
        )
    return ApiResponse.ok(out, "Video published successfully", status_code=201)


@router.get("/{video_id}", response_model=ApiResponse[VideoDetailOut])
def get_video(video_id: str, db: Session = Depends(get_db)):
    return ApiResponse.ok(video_service.get_video(db, video_id), "Video fetched successfully")


@router.patch("/{video_id}", response_model=ApiResponse[VideoDetailOut])
def update_video(
    video_id: str,
    title: Optional[str] = Form(default=None),
    description: Optional[str] = Form(default=None),
    video_file: Optional[UploadFile] = File(default=None, alias="videoFile"),
    thumbnail: Optional[UploadFile] = File(default=None),
    user: User = Depends(get_current_user),
    store: MediaStore = Depends(get_media_store),
    db: Session = Depends(get_db),
):
    with spooled(video_file, thumbnail) as (video_path, thumbnail_path):
        out = video_service.update_video(
            db,
            store,
            video_id,
            title=title,
            description=description,
            video_path=video_path,
            thumbnail_path=thumbnail_path,
            caller=user,
        )
    return ApiResponse.ok(out, "Video updated successfully")


@router.delete("/{video_id}", response_model=ApiResponse[VideoDeleteOut])
def delete_video(
    video_id: str,
    user: User = Depends(get_current_user),
    store: MediaStore = Depends(get_media_store),
    db: Session = Depends(get_db),
):
    out = video_service.delete_video(db, store, video_id, user)
    return ApiResponse.ok(out, "Video deleted successfully")


@router.patch("/toggle/publish/{video_id}", response_model=ApiResponse[PublishStatusOut])
def toggle_publish_status(
    video_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    out = video_service.toggle_publish(db, video_id, user)
    return ApiResponse.ok(out, "Video publish status toggled successfully")
