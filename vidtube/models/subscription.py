from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint, CheckConstraint

from vidtube.core.database import Base
from vidtube.core.ids import new_id


class Subscription(Base):
    __tablename__ = "subscriptions"
    __table_args__ = (
        UniqueConstraint("subscriber_id", "channel_id", name="uq_subscriptions_pair"),
        CheckConstraint("subscriber_id <> channel_id", name="ck_subscriptions_not_self"),
    )

    id = Column(String(32), primary_key=True, default=new_id)

    # both sides are users; channel_id is the user whose uploads are followed
    subscriber_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)
    channel_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
