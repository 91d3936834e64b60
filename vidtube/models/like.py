from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint, CheckConstraint

from vidtube.core.database import Base
from vidtube.core.ids import new_id


def video_target(video_id: str) -> str:
    return f"video:{video_id}"


def comment_target(comment_id: str) -> str:
    return f"comment:{comment_id}"


class Like(Base):
    """
    One row per (liker, target).

    target is "video:<id>" or "comment:<id>". A comment like also carries the
    comment's video_id so everything under a video can be removed by video_id.
    """

    __tablename__ = "likes"
    __table_args__ = (
        UniqueConstraint("liked_by", "target", name="uq_likes_liker_target"),
        CheckConstraint("video_id IS NOT NULL OR comment_id IS NOT NULL", name="ck_likes_has_target"),
    )

    id = Column(String(32), primary_key=True, default=new_id)

    video_id = Column(String(32), ForeignKey("videos.id"), nullable=True, index=True)
    comment_id = Column(String(32), ForeignKey("comments.id"), nullable=True, index=True)
    liked_by = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)

    target = Column(String(48), nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
