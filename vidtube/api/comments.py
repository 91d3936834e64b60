from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from vidtube.core.auth import get_current_user
from vidtube.core.database import get_db
from vidtube.models.user import User
from vidtube.schemas.base import ApiResponse
from vidtube.schemas.comment import CommentIn, CommentOut, CommentPageOut
from vidtube.services import comments as comment_service

router = APIRouter(prefix="/comments", tags=["comments"])


@router.get("/{video_id}", response_model=ApiResponse[CommentPageOut])
def get_video_comments(
    video_id: str,
    # kept as strings: junk values fall back to page 1 / default size
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
):
    out = comment_service.list_comments(db, video_id, page=page, limit=limit)
    return ApiResponse.ok(out, "Video comments fetched successfully")


@router.post("/{video_id}", response_model=ApiResponse[CommentOut], status_code=201)
def add_comment(
    video_id: str,
    payload: CommentIn,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    out = comment_service.create_comment(db, video_id, payload.content, user)
    return ApiResponse.ok(out, "Comment added successfully", status_code=201)


@router.patch("/c/{comment_id}", response_model=ApiResponse[CommentOut])
def update_comment(
    comment_id: str,
    payload: CommentIn,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    out = comment_service.update_comment(db, comment_id, payload.content, user)
    return ApiResponse.ok(out, "Comment updated successfully")


@router.delete("/c/{comment_id}", response_model=ApiResponse)
def delete_comment(
    comment_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    comment_service.delete_comment(db, comment_id, user)
    return ApiResponse.ok(None, "Comment deleted successfully")
