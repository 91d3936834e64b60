# vidtube/models/video.py
from __future__ import annotations

from datetime import datetime
from sqlalchemy import Column, Integer, Float, String, Text, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship

from vidtube.core.database import Base
from vidtube.core.ids import new_id


class Video(Base):
    __tablename__ = "videos"

    id                  = Column(String(32), primary_key=True, default=new_id)

    title               = Column(String(200), nullable=False)
    description         = Column(Text, nullable=False)

    video_file          = Column(String(500), nullable=False)   # media store URL
    video_public_id     = Column(String(255), nullable=True)    # opaque, only used to delete
    thumbnail           = Column(String(500), nullable=False)
    thumbnail_public_id = Column(String(255), nullable=True)

    duration            = Column(Float, default=0, nullable=False)
    views               = Column(Integer, default=0, nullable=False)
    is_published        = Column(Boolean, default=True, nullable=False)

    owner_id            = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)

    created_at          = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at          = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    owner = relationship("User")
