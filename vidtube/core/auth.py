# vidtube/core/auth.py
"""
Caller resolution and ownership checks.

Login and token handling live outside this service: the gateway in front of it
authenticates the user and forwards the id in the X-User-Id header.

Used by every router through Depends(get_current_user); services call
ensure_owner before mutating a video or comment.
"""
from __future__ import annotations

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from vidtube.core.database import get_db
from vidtube.core.errors import Forbidden, Unauthenticated
from vidtube.core.ids import is_valid_id
from vidtube.models.user import User


def get_current_user(
    x_user_id: str | None = Header(default=None, alias="X-User-Id"),
    db: Session = Depends(get_db),
) -> User:
    raw = (x_user_id or "").strip().lower()
    if not raw:
        raise Unauthenticated("User not authenticated. Please log in.")
    if not is_valid_id(raw):
        raise Unauthenticated("Invalid user id")

    user = db.get(User, raw)
    if not user:
        raise Unauthenticated("Invalid user id")
    return user


# ── Ownership ─────────────────────────────────────────────

def is_owner(owner_id: str | None, caller: User | None) -> bool:
    if caller is None or not owner_id:
        return False
    return str(owner_id) == str(caller.id)


def ensure_owner(owner_id: str | None, caller: User | None, action: str = "modify this resource") -> None:
    if not is_owner(owner_id, caller):
        raise Forbidden(f"You are not authorized to {action}")
