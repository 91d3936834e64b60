from __future__ import annotations

import re
import uuid

from vidtube.core.errors import InvalidArgument

_ID_RE = re.compile(r"^[0-9a-f]{32}$")


def new_id() -> str:
    return uuid.uuid4().hex


def is_valid_id(raw: str | None) -> bool:
    return bool(raw) and bool(_ID_RE.match(raw))


def parse_id(raw: str | None, label: str = "ID") -> str:
    """Normalises an incoming id or raises InvalidArgument."""
    if not raw or not raw.strip():
        raise InvalidArgument(f"{label} is required")
    value = raw.strip().lower()
    if not _ID_RE.match(value):
        raise InvalidArgument(f"Invalid {label} provided")
    return value
