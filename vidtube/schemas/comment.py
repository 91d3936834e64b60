from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from vidtube.schemas.base import CamelModel
from vidtube.schemas.user import OwnerOut


class CommentIn(CamelModel):
    content: Optional[str] = Field(default=None, max_length=5000)


class CommentVideoOut(CamelModel):
    id: str
    title: str
    thumbnail: str


class CommentOut(CamelModel):
    id: str
    content: str
    created_at: datetime
    updated_at: datetime
    owner: Optional[OwnerOut] = None
    video: Optional[CommentVideoOut] = None


class PaginationOut(CamelModel):
    total_comments: int
    limit: int
    page: int
    total_pages: int
    sl_no: int
    has_prev_page: bool
    has_next_page: bool
    prev_page: Optional[int] = None
    next_page: Optional[int] = None


class CommentPageOut(CamelModel):
    comments: List[CommentOut]
    pagination: PaginationOut
