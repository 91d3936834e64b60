from __future__ import annotations

from vidtube.schemas.base import CamelModel


class LikeStatusOut(CamelModel):
    is_liked: bool
