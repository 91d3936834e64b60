from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, String, DateTime

from vidtube.core.database import Base
from vidtube.core.ids import new_id


class User(Base):
    """Channel owner / viewer. Registration and profile edits live elsewhere."""

    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=new_id)

    username = Column(String(60), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, nullable=False)

    full_name = Column(String(120), nullable=True)
    avatar = Column(String(500), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
