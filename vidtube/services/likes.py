from __future__ import annotations

from typing import List

from sqlalchemy.orm import Session

from vidtube.core.errors import NotFound
from vidtube.core.ids import parse_id
from vidtube.models.comment import Comment
from vidtube.models.like import Like, comment_target, video_target
from vidtube.models.user import User
from vidtube.models.video import Video
from vidtube.schemas.like import LikeStatusOut
from vidtube.schemas.video import VideoSummaryOut
from vidtube.services.toggle import toggle_row
from vidtube.services.videos import video_summary


def toggle_video_like(db: Session, video_id: str, liker: User) -> LikeStatusOut:
    vid = parse_id(video_id, "Video ID")
    if not db.get(Video, vid):
        raise NotFound("Video not found")

    target = video_target(vid)
    is_liked = toggle_row(
        db,
        Like,
        [Like.liked_by == liker.id, Like.target == target],
        lambda: Like(video_id=vid, liked_by=liker.id, target=target),
    )
    return LikeStatusOut(is_liked=is_liked)


def toggle_comment_like(db: Session, comment_id: str, liker: User) -> LikeStatusOut:
    cid = parse_id(comment_id, "Comment ID")
    comment = db.get(Comment, cid)
    if not comment:
        raise NotFound("Comment not found")

    target = comment_target(cid)
    video_id = comment.video_id
    is_liked = toggle_row(
        db,
        Like,
        [Like.liked_by == liker.id, Like.target == target],
        # video_id rides along so deleting the video takes this like with it
        lambda: Like(comment_id=cid, video_id=video_id, liked_by=liker.id, target=target),
    )
    return LikeStatusOut(is_liked=is_liked)


def list_liked_videos(db: Session, liker: User) -> List[VideoSummaryOut]:
    rows = (
        db.query(Video, User)
        .join(Like, Like.video_id == Video.id)
        .join(User, User.id == Video.owner_id)
        .filter(Like.liked_by == liker.id)
        .filter(Like.comment_id.is_(None))
        .order_by(Like.created_at.desc(), Like.id.asc())
        .all()
    )
    return [video_summary(v, owner) for v, owner in rows]
