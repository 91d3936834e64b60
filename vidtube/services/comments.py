from __future__ import annotations

import logging
import math

from sqlalchemy import delete
from sqlalchemy.orm import Session

from vidtube.core.auth import ensure_owner
from vidtube.core.config import settings
from vidtube.core.errors import InvalidArgument, InternalError, NotFound
from vidtube.core.ids import parse_id
from vidtube.models.comment import Comment
from vidtube.models.like import Like
from vidtube.models.user import User
from vidtube.models.video import Video
from vidtube.schemas.comment import CommentOut, CommentPageOut, CommentVideoOut, PaginationOut
from vidtube.schemas.user import OwnerOut

logger = logging.getLogger(__name__)


def _positive_int(raw, default: int) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


def comment_view(c: Comment, owner: User | None, video: Video | None = None) -> CommentOut:
    return CommentOut(
        id=c.id,
        content=c.content,
        created_at=c.created_at,
        updated_at=c.updated_at,
        owner=OwnerOut.from_user(owner),
        video=CommentVideoOut(id=video.id, title=video.title, thumbnail=video.thumbnail) if video else None,
    )


def _clean_content(content: str | None) -> str:
    text = (content or "").strip()
    if not text:
        raise InvalidArgument("Comment content is required")
    return text


def _load_owned(db: Session, comment_id: str, caller: User, action: str) -> Comment:
    cid = parse_id(comment_id, "Comment ID")
    c = db.get(Comment, cid)
    if not c:
        raise NotFound("Comment not found")
    ensure_owner(c.owner_id, caller, action)
    return c


def list_comments(db: Session, video_id: str, page=1, limit=None) -> CommentPageOut:
    vid = parse_id(video_id, "Video ID")
    if not db.get(Video, vid):
        raise NotFound("Video not found")

    page = _positive_int(page, 1)
    limit = min(_positive_int(limit, settings.DEFAULT_PAGE_SIZE), settings.MAX_PAGE_SIZE)

    # inner join: comments whose author is gone are not listed
    q = (
        db.query(Comment, User)
        .join(User, User.id == Comment.owner_id)
        .filter(Comment.video_id == vid)
    )
    total = q.count()
    rows = (
        q.order_by(Comment.created_at.desc(), Comment.id.asc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )

    total_pages = math.ceil(total / limit) or 1
    has_prev = page > 1
    has_next = page < total_pages

    return CommentPageOut(
        comments=[comment_view(c, owner) for c, owner in rows],
        pagination=PaginationOut(
            total_comments=total,
            limit=limit,
            page=page,
            total_pages=total_pages,
            sl_no=(page - 1) * limit + 1,
            has_prev_page=has_prev,
            has_next_page=has_next,
            prev_page=page - 1 if has_prev else None,
            next_page=page + 1 if has_next else None,
        ),
    )


def create_comment(db: Session, video_id: str, content: str | None, owner: User) -> CommentOut:
    text = _clean_content(content)
    vid = parse_id(video_id, "Video ID")

    video = db.get(Video, vid)
    if not video:
        raise NotFound("Video not found")

    c = Comment(content=text, video_id=vid, owner_id=owner.id)
    db.add(c)
    db.commit()
    db.refresh(c)
    return comment_view(c, owner, video)


def update_comment(db: Session, comment_id: str, content: str | None, caller: User) -> CommentOut:
    text = _clean_content(content)
    c = _load_owned(db, comment_id, caller, "update this comment")

    c.content = text
    db.commit()
    db.refresh(c)
    return comment_view(c, c.owner, c.video)


def delete_comment(db: Session, comment_id: str, caller: User) -> None:
    c = _load_owned(db, comment_id, caller, "delete this comment")
    cid = c.id

    deleted_likes = db.execute(
        delete(Like).where(Like.comment_id == cid).execution_options(synchronize_session=False)
    ).rowcount
    deleted = db.execute(
        delete(Comment).where(Comment.id == cid).execution_options(synchronize_session=False)
    ).rowcount
    if deleted == 0:
        db.rollback()
        raise InternalError("Something went wrong while deleting the comment, or it was deleted concurrently.")
    db.commit()

    logger.info(f"Deleted comment {cid} and {deleted_likes} likes on it")
