from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from vidtube.core.auth import get_current_user
from vidtube.core.database import get_db
from vidtube.models.user import User
from vidtube.schemas.base import ApiResponse
from vidtube.schemas.subscription import SubscriptionStatusOut
from vidtube.schemas.user import OwnerOut
from vidtube.services import subscriptions as subscription_service

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


@router.post("/c/{channel_id}", response_model=ApiResponse[SubscriptionStatusOut])
def toggle_subscription(
    channel_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    out = subscription_service.toggle_subscription(db, channel_id, user)
    message = "Subscribed successfully" if out.is_subscribed else "Unsubscribed successfully"
    return ApiResponse.ok(out, message)


@router.get("/c/{channel_id}", response_model=ApiResponse[List[OwnerOut]])
def get_channel_subscribers(channel_id: str, db: Session = Depends(get_db)):
    subscribers = subscription_service.list_subscribers(db, channel_id)
    if not subscribers:
        return ApiResponse.ok([], "No subscribers found for this channel")
    return ApiResponse.ok(subscribers, "Subscribers fetched successfully")


@router.get("/u/{subscriber_id}", response_model=ApiResponse[List[OwnerOut]])
def get_subscribed_channels(subscriber_id: str, db: Session = Depends(get_db)):
    channels = subscription_service.list_subscribed_channels(db, subscriber_id)
    if not channels:
        return ApiResponse.ok([], "This user has not subscribed to any channels")
    return ApiResponse.ok(channels, "Subscribed channels fetched successfully")
