# vidtube/services/query.py
"""
Video listing query builder.

A listing is an ordered tuple of stages: any number of filters, then at most
one Sort, then at most one Page. Stages validate their own arguments when
constructed, the query validates the ordering, and statement() compiles the
whole thing into one SELECT with the owner left-joined in.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from sqlalchemy import Select, or_, select

from vidtube.core.config import settings
from vidtube.core.errors import InvalidArgument
from vidtube.core.ids import parse_id
from vidtube.models.user import User
from vidtube.models.video import Video

SORTABLE = {
    "created_at": Video.created_at,
    "updated_at": Video.updated_at,
    "views":      Video.views,
    "duration":   Video.duration,
    "title":      Video.title,
}

# camelCase names the frontend sends
SORT_ALIASES = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


# ── Stages ─────────────────────────────────────────────────
@dataclass(frozen=True)
class TextFilter:
    """Case-insensitive substring match on title OR description."""
    term: str

    def __post_init__(self):
        if not self.term or not self.term.strip():
            raise InvalidArgument("Search query must not be empty")

    def apply(self, stmt: Select) -> Select:
        pattern = f"%{_escape_like(self.term.strip())}%"
        return stmt.where(or_(
            Video.title.ilike(pattern, escape="\\"),
            Video.description.ilike(pattern, escape="\\"),
        ))


@dataclass(frozen=True)
class OwnerFilter:
    owner_id: str

    def __post_init__(self):
        object.__setattr__(self, "owner_id", parse_id(self.owner_id, "userId"))

    def apply(self, stmt: Select) -> Select:
        return stmt.where(Video.owner_id == self.owner_id)


@dataclass(frozen=True)
class Sort:
    key: str = "created_at"
    direction: str = "desc"

    def __post_init__(self):
        name = SORT_ALIASES.get(self.key, self.key)
        if name not in SORTABLE:
            raise InvalidArgument(f"Cannot sort by '{self.key}'. Allowed: {', '.join(SORTABLE)}")
        direction = (self.direction or "desc").lower()
        if direction not in ("asc", "desc"):
            raise InvalidArgument("sortType must be 'asc' or 'desc'")
        object.__setattr__(self, "key", name)
        object.__setattr__(self, "direction", direction)

    def apply(self, stmt: Select) -> Select:
        col = SORTABLE[self.key]
        order = col.asc() if self.direction == "asc" else col.desc()
        # id as tie-breaker keeps pages stable when sort keys collide
        return stmt.order_by(order, Video.id.asc())


@dataclass(frozen=True)
class Page:
    page: int = 1
    limit: int = 10

    def __post_init__(self):
        if self.page < 1:
            raise InvalidArgument("page must be >= 1")
        if not 1 <= self.limit <= settings.MAX_PAGE_SIZE:
            raise InvalidArgument(f"limit must be between 1 and {settings.MAX_PAGE_SIZE}")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def apply(self, stmt: Select) -> Select:
        return stmt.offset(self.offset).limit(self.limit)


Stage = Union[TextFilter, OwnerFilter, Sort, Page]


# ── Query ──────────────────────────────────────────────────
@dataclass(frozen=True)
class VideoListQuery:
    stages: Tuple[Stage, ...] = field(default_factory=tuple)

    def __post_init__(self):
        seen_sort = seen_page = False
        for stage in self.stages:
            if isinstance(stage, (TextFilter, OwnerFilter)):
                if seen_sort or seen_page:
                    raise ValueError("filters must come before sort and pagination")
            elif isinstance(stage, Sort):
                if seen_sort or seen_page:
                    raise ValueError("at most one sort, before pagination")
                seen_sort = True
            elif isinstance(stage, Page):
                if seen_page:
                    raise ValueError("at most one pagination window")
                seen_page = True
            else:
                raise TypeError(f"unknown stage: {stage!r}")

    @classmethod
    def from_params(
        cls,
        query: Optional[str] = None,
        user_id: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_type: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> "VideoListQuery":
        stages: list[Stage] = []
        if query and query.strip():
            stages.append(TextFilter(query))
        if user_id:
            stages.append(OwnerFilter(user_id))
        if sort_by:
            stages.append(Sort(sort_by, sort_type or "desc"))
        else:
            stages.append(Sort())
        stages.append(Page(page, limit))
        return cls(tuple(stages))

    @property
    def sort(self) -> Sort:
        return next((s for s in self.stages if isinstance(s, Sort)), Sort())

    @property
    def page(self) -> Optional[Page]:
        return next((s for s in self.stages if isinstance(s, Page)), None)

    def statement(self) -> Select:
        stmt = select(Video, User).outerjoin(User, User.id == Video.owner_id)
        for stage in self.stages:
            if isinstance(stage, (TextFilter, OwnerFilter)):
                stmt = stage.apply(stmt)
        stmt = self.sort.apply(stmt)
        if self.page is not None:
            stmt = self.page.apply(stmt)
        return stmt
