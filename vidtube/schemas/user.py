from __future__ import annotations

from typing import Optional

from vidtube.schemas.base import CamelModel


class OwnerOut(CamelModel):
    """Public profile projection used wherever a user is joined in."""

    id: str
    username: str
    full_name: Optional[str] = None
    avatar: Optional[str] = None

    @classmethod
    def from_user(cls, user) -> Optional["OwnerOut"]:
        if user is None:
            return None
        return cls(id=user.id, username=user.username, full_name=user.full_name, avatar=user.avatar)
