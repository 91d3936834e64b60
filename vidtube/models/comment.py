from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from vidtube.core.database import Base
from vidtube.core.ids import new_id


class Comment(Base):
    __tablename__ = "comments"

    id = Column(String(32), primary_key=True, default=new_id)

    content = Column(Text, nullable=False)

    video_id = Column(String(32), ForeignKey("videos.id"), nullable=False, index=True)
    owner_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    owner = relationship("User")
    video = relationship("Video")
