"""
Shared fixtures for the VidTube test suite.

The app runs against an in-memory SQLite database (one shared connection) and
a FakeMediaStore injected through app.dependency_overrides, so no test touches
the network or a real media host.
"""
import os
import tempfile

_TMP = tempfile.mkdtemp(prefix="vidtube-tests-")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["MEDIA_BACKEND"] = "local"
os.environ["MEDIA_ROOT"] = os.path.join(_TMP, "media")
os.environ["UPLOAD_TEMP_DIR"] = os.path.join(_TMP, "temp")
os.environ["CORS_ORIGINS"] = "http://localhost:5173"

from datetime import datetime, timedelta
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from main import app
from vidtube.core.database import Base, SessionLocal, engine
from vidtube.models import Comment, Like, User, Video
from vidtube.models.like import comment_target, video_target
from vidtube.services.media_store import MediaAsset, MediaStore, get_media_store


class FakeMediaStore(MediaStore):
    """Records calls; uploads fail when the file content contains a fail marker."""

    def __init__(self):
        self.uploaded: list[str] = []
        self.deleted: list[tuple[str, str]] = []
        self.fail_markers: set[str] = set()
        self._n = 0

    def upload(self, local_path: Optional[str]) -> Optional[MediaAsset]:
        if not local_path:
            return None
        try:
            name = os.path.basename(local_path)
            with open(local_path, "rb") as fh:
                content = fh.read()
            if any(marker.encode() in content for marker in self.fail_markers):
                return None
            self._n += 1
            public_id = f"asset-{self._n}"
            is_video = name.endswith((".mp4", ".mov", ".webm"))
            self.uploaded.append(public_id)
            return MediaAsset(
                url=f"https://media.test/{public_id}{os.path.splitext(name)[1]}",
                public_id=public_id,
                resource_type="video" if is_video else "image",
                duration=12.5 if is_video else None,
            )
        finally:
            if os.path.exists(local_path):
                os.remove(local_path)

    def delete(self, public_id: Optional[str], resource_type: str = "image") -> Optional[dict]:
        if not public_id:
            return None
        self.deleted.append((public_id, resource_type))
        return {"result": "ok"}


# =============================================================================
# App / DB
# =============================================================================

@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def media_store():
    return FakeMediaStore()


@pytest.fixture
def client(media_store):
    app.dependency_overrides[get_media_store] = lambda: media_store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def auth():
    def _headers(user: User) -> dict:
        return {"X-User-Id": user.id}

    return _headers


# =============================================================================
# Factories
# =============================================================================

@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(username: Optional[str] = None, **kw) -> User:
        counter["n"] += 1
        name = username or f"user{counter['n']}"
        user = User(
            username=name,
            email=kw.pop("email", f"{name}@example.com"),
            full_name=kw.pop("full_name", name.title()),
            avatar=kw.pop("avatar", f"https://media.test/{name}.png"),
            **kw,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def make_video(db):
    base = datetime(2024, 1, 1, 12, 0, 0)
    counter = {"n": 0}

    def _make(owner: User, title: str = "Untitled", description: str = "No description", **kw) -> Video:
        counter["n"] += 1
        n = counter["n"]
        created = kw.pop("created_at", base + timedelta(minutes=n))
        video = Video(
            title=title,
            description=description,
            video_file=kw.pop("video_file", f"https://media.test/v{n}.mp4"),
            video_public_id=kw.pop("video_public_id", f"old-video-{n}"),
            thumbnail=kw.pop("thumbnail", f"https://media.test/t{n}.jpg"),
            thumbnail_public_id=kw.pop("thumbnail_public_id", f"old-thumb-{n}"),
            duration=kw.pop("duration", 60.0),
            views=kw.pop("views", 0),
            owner_id=owner.id,
            created_at=created,
            updated_at=created,
            **kw,
        )
        db.add(video)
        db.commit()
        db.refresh(video)
        return video

    return _make


@pytest.fixture
def make_comment(db):
    base = datetime(2024, 2, 1, 12, 0, 0)
    counter = {"n": 0}

    def _make(video: Video, owner: User, content: str = "Nice video") -> Comment:
        counter["n"] += 1
        created = base + timedelta(minutes=counter["n"])
        comment = Comment(
            content=content,
            video_id=video.id,
            owner_id=owner.id,
            created_at=created,
            updated_at=created,
        )
        db.add(comment)
        db.commit()
        db.refresh(comment)
        return comment

    return _make


@pytest.fixture
def make_like(db):
    def _make(user: User, video: Optional[Video] = None, comment: Optional[Comment] = None) -> Like:
        if comment is not None:
            like = Like(comment_id=comment.id, video_id=comment.video_id, liked_by=user.id,
                        target=comment_target(comment.id))
        else:
            like = Like(video_id=video.id, liked_by=user.id, target=video_target(video.id))
        db.add(like)
        db.commit()
        db.refresh(like)
        return like

    return _make
