from __future__ import annotations

from typing import List

from sqlalchemy.orm import Session

from vidtube.core.errors import InvalidArgument, NotFound
from vidtube.core.ids import parse_id
from vidtube.models.subscription import Subscription
from vidtube.models.user import User
from vidtube.schemas.subscription import SubscriptionStatusOut
from vidtube.schemas.user import OwnerOut
from vidtube.services.toggle import toggle_row


def toggle_subscription(db: Session, channel_id: str, subscriber: User) -> SubscriptionStatusOut:
    cid = parse_id(channel_id, "channel ID")
    if not db.get(User, cid):
        raise NotFound("Channel not found")
    if cid == subscriber.id:
        raise InvalidArgument("You cannot subscribe to your own channel")

    is_subscribed = toggle_row(
        db,
        Subscription,
        [Subscription.subscriber_id == subscriber.id, Subscription.channel_id == cid],
        lambda: Subscription(subscriber_id=subscriber.id, channel_id=cid),
    )
    return SubscriptionStatusOut(is_subscribed=is_subscribed, channel_id=cid)


def list_subscribers(db: Session, channel_id: str) -> List[OwnerOut]:
    cid = parse_id(channel_id, "channel ID")
    users = (
        db.query(User)
        .join(Subscription, Subscription.subscriber_id == User.id)
        .filter(Subscription.channel_id == cid)
        .order_by(Subscription.created_at.desc(), Subscription.id.asc())
        .all()
    )
    return [OwnerOut.from_user(u) for u in users]


def list_subscribed_channels(db: Session, subscriber_id: str) -> List[OwnerOut]:
    sid = parse_id(subscriber_id, "subscriber ID")
    users = (
        db.query(User)
        .join(Subscription, Subscription.channel_id == User.id)
        .filter(Subscription.subscriber_id == sid)
        .order_by(Subscription.created_at.desc(), Subscription.id.asc())
        .all()
    )
    return [OwnerOut.from_user(u) for u in users]
