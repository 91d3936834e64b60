# vidtube/services/videos.py
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import delete, or_, select, update
from sqlalchemy.orm import Session

from vidtube.core.auth import ensure_owner
from vidtube.core.errors import InvalidArgument, InternalError, NotFound, UploadFailure
from vidtube.core.ids import parse_id
from vidtube.models.comment import Comment
from vidtube.models.like import Like
from vidtube.models.user import User
from vidtube.models.video import Video
from vidtube.schemas.user import OwnerOut
from vidtube.schemas.video import (
    PublishStatusOut,
    VideoDeleteOut,
    VideoDetailOut,
    VideoListOut,
    VideoSummaryOut,
)
from vidtube.services.media_store import MediaAsset, MediaStore, delete_quietly
from vidtube.services.query import VideoListQuery

logger = logging.getLogger(__name__)


# ── Projections ────────────────────────────────────────────
def video_summary(v: Video, owner: Optional[User]) -> VideoSummaryOut:
    return VideoSummaryOut(
        id=v.id,
        title=v.title,
        description=v.description,
        video_file=v.video_file,
        thumbnail=v.thumbnail,
        duration=v.duration or 0,
        views=v.views or 0,
        is_published=v.is_published,
        created_at=v.created_at,
        owner=OwnerOut.from_user(owner),
    )


def video_detail(v: Video, owner: Optional[User]) -> VideoDetailOut:
    return VideoDetailOut(
        **video_summary(v, owner).model_dump(),
        updated_at=v.updated_at,
    )


def _joined(db: Session, video_id: str):
    return db.execute(
        select(Video, User)
        .outerjoin(User, User.id == Video.owner_id)
        .where(Video.id == video_id)
    ).first()


def _load_owned(db: Session, video_id: str, caller: User, action: str) -> Video:
    vid = parse_id(video_id, "Video ID")
    v = db.get(Video, vid)
    if not v:
        raise NotFound("Video not found")
    ensure_owner(v.owner_id, caller, action)
    return v


# ── Queries ────────────────────────────────────────────────
def list_videos(db: Session, query: VideoListQuery) -> VideoListOut:
    rows = db.execute(query.statement()).all()
    return VideoListOut(videos=[video_summary(v, owner) for v, owner in rows])


def get_video(db: Session, video_id: str) -> VideoDetailOut:
    """Fetches one video and counts the view. The increment is a single UPDATE."""
    vid = parse_id(video_id, "Video ID")

    res = db.execute(
        update(Video)
        .where(Video.id == vid)
        # keep updated_at: a view is not an edit
        .values(views=Video.views + 1, updated_at=Video.updated_at)
        .execution_options(synchronize_session=False)
    )
    if res.rowcount == 0:
        db.rollback()
        raise NotFound("Video not found")
    db.commit()

    row = _joined(db, vid)
    if not row:
        raise NotFound("Video not found")
    v, owner = row
    return video_detail(v, owner)


# ── Mutations ──────────────────────────────────────────────
def _require_upload(asset: Optional[MediaAsset], what: str, need_public_id: bool = False) -> MediaAsset:
    if not asset or not asset.url or (need_public_id and not asset.public_id):
        raise UploadFailure(f"Failed to upload {what} to the media store")
    return asset


def create_video(
    db: Session,
    store: MediaStore,
    *,
    title: str | None,
    description: str | None,
    video_path: str | None,
    thumbnail_path: str | None,
    owner: User,
) -> VideoDetailOut:
    title = (title or "").strip()
    description = (description or "").strip()
    if not title or not description:
        raise InvalidArgument("Title and description are required")
    if not video_path:
        raise InvalidArgument("Video file is required")
    if not thumbnail_path:
        raise InvalidArgument("Thumbnail is required")

    video_asset = _require_upload(store.upload(video_path), "video file")
    try:
        thumb_asset = _require_upload(store.upload(thumbnail_path), "thumbnail")
    except UploadFailure:
        delete_quietly(store, video_asset.public_id, "video")
        raise

    v = Video(
        title=title,
        description=description,
        video_file=video_asset.url,
        video_public_id=video_asset.public_id,
        thumbnail=thumb_asset.url,
        thumbnail_public_id=thumb_asset.public_id,
        duration=video_asset.duration or 0,
        owner_id=owner.id,
        is_published=True,
    )
    db.add(v)
    db.commit()
    db.refresh(v)

    logger.info(f"Video {v.id} published by {owner.id}")
    return video_detail(v, owner)


def update_video(
    db: Session,
    store: MediaStore,
    video_id: str,
    *,
    title: str | None = None,
    description: str | None = None,
    video_path: str | None = None,
    thumbnail_path: str | None = None,
    caller: User,
) -> VideoDetailOut:
    """
    Replaces whatever was supplied. New media is uploaded first; the old asset
    is deleted only after the row points at the replacement.
    """
    vid = parse_id(video_id, "Video ID")
    title = (title or "").strip() or None
    description = (description or "").strip() or None
    if not any((title, description, video_path, thumbnail_path)):
        raise InvalidArgument(
            "At least one field (title, description, video, or thumbnail) is required to update."
        )

    v = _load_owned(db, vid, caller, "update this video")

    if title:
        v.title = title
    if description:
        v.description = description

    fresh: list[tuple[str, str]] = []
    stale: list[tuple[str | None, str]] = []
    try:
        if video_path:
            asset = _require_upload(store.upload(video_path), "new video file", need_public_id=True)
            fresh.append((asset.public_id, "video"))
            stale.append((v.video_public_id, "video"))
            v.video_file = asset.url
            v.video_public_id = asset.public_id
            if asset.duration is not None:
                v.duration = asset.duration

        if thumbnail_path:
            asset = _require_upload(store.upload(thumbnail_path), "new thumbnail", need_public_id=True)
            fresh.append((asset.public_id, "image"))
            stale.append((v.thumbnail_public_id, "image"))
            v.thumbnail = asset.url
            v.thumbnail_public_id = asset.public_id
    except UploadFailure:
        db.rollback()
        for public_id, kind in fresh:
            delete_quietly(store, public_id, kind)
        raise

    db.commit()
    db.refresh(v)

    for public_id, kind in stale:
        delete_quietly(store, public_id, kind)

    return video_detail(v, v.owner)


def delete_video(db: Session, store: MediaStore, video_id: str, caller: User) -> VideoDeleteOut:
    """
    Removes the video with its comments and every like under it in one
    transaction, then drops the media assets best-effort.
    """
    v = _load_owned(db, video_id, caller, "delete this video")
    vid = v.id
    media = [(v.video_public_id, "video"), (v.thumbnail_public_id, "image")]

    comment_ids = select(Comment.id).where(Comment.video_id == vid)
    deleted_likes = db.execute(
        delete(Like)
        .where(or_(Like.video_id == vid, Like.comment_id.in_(comment_ids)))
        .execution_options(synchronize_session=False)
    ).rowcount
    deleted_comments = db.execute(
        delete(Comment).where(Comment.video_id == vid).execution_options(synchronize_session=False)
    ).rowcount
    deleted = db.execute(
        delete(Video).where(Video.id == vid).execution_options(synchronize_session=False)
    ).rowcount

    if deleted == 0:
        # someone else removed it between the load and the delete
        db.rollback()
        raise InternalError("Failed to delete video from database")
    db.commit()

    logger.info(f"Video {vid} deleted with {deleted_comments} comments and {deleted_likes} likes")

    for public_id, kind in media:
        delete_quietly(store, public_id, kind)

    return VideoDeleteOut(video_id=vid, deleted_likes=deleted_likes, deleted_comments=deleted_comments)


def toggle_publish(db: Session, video_id: str, caller: User) -> PublishStatusOut:
    v = _load_owned(db, video_id, caller, "toggle video publish status")
    v.is_published = not v.is_published
    db.commit()
    db.refresh(v)
    return PublishStatusOut(is_published=v.is_published)
