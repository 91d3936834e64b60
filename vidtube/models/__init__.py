# vidtube/models/__init__.py
from vidtube.models.user import User
from vidtube.models.video import Video
from vidtube.models.comment import Comment
from vidtube.models.like import Like
from vidtube.models.subscription import Subscription

__all__ = ["User", "Video", "Comment", "Like", "Subscription"]
