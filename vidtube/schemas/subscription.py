from __future__ import annotations

from vidtube.schemas.base import CamelModel


class SubscriptionStatusOut(CamelModel):
    is_subscribed: bool
    channel_id: str
