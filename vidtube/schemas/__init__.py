from vidtube.schemas.base import ApiResponse, CamelModel
from vidtube.schemas.user import OwnerOut
from vidtube.schemas.video import (
    VideoSummaryOut,
    VideoDetailOut,
    VideoListOut,
    VideoDeleteOut,
    PublishStatusOut,
)
from vidtube.schemas.comment import CommentIn, CommentOut, CommentPageOut, PaginationOut
from vidtube.schemas.like import LikeStatusOut
from vidtube.schemas.subscription import SubscriptionStatusOut

__all__ = [
    "ApiResponse",
    "CamelModel",
    "OwnerOut",
    "VideoSummaryOut",
    "VideoDetailOut",
    "VideoListOut",
    "VideoDeleteOut",
    "PublishStatusOut",
    "CommentIn",
    "CommentOut",
    "CommentPageOut",
    "PaginationOut",
    "LikeStatusOut",
    "SubscriptionStatusOut",
]
