"""Local and Cloudinary media store backends."""
import os

import cloudinary
import cloudinary.exceptions
import cloudinary.uploader
import pytest

from vidtube.core.config import settings
from vidtube.services.media_store import (
    CloudinaryMediaStore,
    LocalMediaStore,
    create_media_store,
    delete_quietly,
    guess_resource_type,
)


@pytest.fixture
def temp_file(tmp_path):
    def _make(name="clip.mp4", content=b"data"):
        path = tmp_path / "incoming" / name
        path.parent.mkdir(exist_ok=True)
        path.write_bytes(content)
        return str(path)

    return _make


# =============================================================================
# Local
# =============================================================================

def test_local_upload_copies_and_removes_temp(tmp_path, temp_file):
    store = LocalMediaStore(str(tmp_path / "media"), "/media/")
    src = temp_file("clip.mp4", b"frames")

    asset = store.upload(src)

    assert asset is not None
    assert asset.url == f"/media/{asset.public_id}"
    assert asset.public_id.endswith(".mp4")
    assert asset.resource_type == "video"
    assert (tmp_path / "media" / asset.public_id).read_bytes() == b"frames"
    assert not os.path.exists(src)


def test_local_upload_missing_file(tmp_path):
    store = LocalMediaStore(str(tmp_path / "media"))

    assert store.upload(str(tmp_path / "nope.mp4")) is None
    assert store.upload(None) is None


def test_local_delete(tmp_path, temp_file):
    store = LocalMediaStore(str(tmp_path / "media"))
    asset = store.upload(temp_file("thumb.jpg"))

    assert store.delete(asset.public_id) == {"result": "ok"}
    assert store.delete(asset.public_id) == {"result": "not found"}
    assert store.delete("../escape.txt") is None
    assert store.delete(None) is None


def test_guess_resource_type():
    assert guess_resource_type("a.mp4") == "video"
    assert guess_resource_type("a.png") == "image"
    assert guess_resource_type("a.bin") == "raw"


# =============================================================================
# Cloudinary
# =============================================================================

@pytest.fixture
def uploader(monkeypatch):
    """Replaces the SDK calls; records (name, args, kwargs) per call."""
    calls = []
    responses = {}

    def _fake(name):
        def _call(*args, **kwargs):
            calls.append((name, args, kwargs))
            result = responses.get(name)
            if isinstance(result, Exception):
                raise result
            return result
        return _call

    for name in ("upload", "upload_large", "destroy"):
        monkeypatch.setattr(cloudinary.uploader, name, _fake(name))
    return calls, responses


def _cloudinary(**kw):
    return CloudinaryMediaStore("demo", "key123", "secret456", **kw)


VIDEO_RESPONSE = {
    "secure_url": "https://res.test/video/upload/v1/abc.mp4",
    "url": "http://res.test/video/upload/v1/abc.mp4",
    "public_id": "abc",
    "resource_type": "video",
    "duration": 42.3,
}


def test_cloudinary_configures_sdk():
    _cloudinary()

    config = cloudinary.config()
    assert config.cloud_name == "demo"
    assert config.api_key == "key123"
    assert config.api_secret == "secret456"


def test_cloudinary_upload_success(uploader, temp_file):
    calls, responses = uploader
    responses["upload"] = VIDEO_RESPONSE
    src = temp_file()

    asset = _cloudinary().upload(src)

    name, args, kwargs = calls[0]
    assert name == "upload"
    assert args == (src,)
    assert kwargs["resource_type"] == "auto"
    assert asset.url == "https://res.test/video/upload/v1/abc.mp4"
    assert asset.public_id == "abc"
    assert asset.resource_type == "video"
    assert asset.duration == 42.3
    assert not os.path.exists(src)


def test_cloudinary_large_video_uses_chunked_upload(uploader, temp_file):
    calls, responses = uploader
    responses["upload_large"] = VIDEO_RESPONSE
    src = temp_file("movie.mp4", b"0123456789")

    asset = _cloudinary(large_upload_bytes=4, chunk_size=6).upload(src)

    name, args, kwargs = calls[0]
    assert name == "upload_large"
    assert kwargs["resource_type"] == "video"
    assert kwargs["chunk_size"] == 6
    assert asset.public_id == "abc"
    assert not os.path.exists(src)


def test_cloudinary_large_image_is_a_single_upload(uploader, temp_file):
    calls, responses = uploader
    responses["upload"] = {"secure_url": "https://res.test/image/upload/v1/t.jpg", "public_id": "t"}

    asset = _cloudinary(large_upload_bytes=4).upload(temp_file("thumb.jpg", b"0123456789"))

    assert [c[0] for c in calls] == ["upload"]
    assert asset.url == "https://res.test/image/upload/v1/t.jpg"


def test_cloudinary_upload_error_returns_none_and_cleans_up(uploader, temp_file):
    _, responses = uploader
    responses["upload"] = cloudinary.exceptions.Error("Invalid Signature")
    src = temp_file()

    assert _cloudinary().upload(src) is None
    assert not os.path.exists(src)


def test_cloudinary_upload_without_url_returns_none(uploader, temp_file):
    _, responses = uploader
    responses["upload"] = {"public_id": "abc"}

    assert _cloudinary().upload(temp_file()) is None


def test_cloudinary_upload_missing_file(uploader, tmp_path):
    calls, _ = uploader

    assert _cloudinary().upload(str(tmp_path / "gone.mp4")) is None
    assert _cloudinary().upload(None) is None
    assert calls == []


def test_cloudinary_delete(uploader):
    calls, responses = uploader
    responses["destroy"] = {"result": "ok"}

    assert _cloudinary().delete("abc", "video") == {"result": "ok"}
    name, args, kwargs = calls[0]
    assert (name, args, kwargs["resource_type"]) == ("destroy", ("abc",), "video")


def test_cloudinary_delete_failure_is_swallowed(uploader):
    _, responses = uploader
    store = _cloudinary()

    responses["destroy"] = cloudinary.exceptions.Error("boom")
    assert store.delete("abc", "image") is None
    delete_quietly(store, "abc", "image")

    responses["destroy"] = {"result": "error"}
    assert store.delete("abc", "image") is None


# =============================================================================
# Factory
# =============================================================================

def test_factory_requires_cloudinary_credentials(monkeypatch):
    monkeypatch.setattr(settings, "MEDIA_BACKEND", "cloudinary")
    monkeypatch.setattr(settings, "CLOUDINARY_CLOUD_NAME", None)

    with pytest.raises(RuntimeError):
        create_media_store()


def test_factory_builds_cloudinary_store(monkeypatch):
    monkeypatch.setattr(settings, "MEDIA_BACKEND", "cloudinary")
    monkeypatch.setattr(settings, "CLOUDINARY_CLOUD_NAME", "demo")
    monkeypatch.setattr(settings, "CLOUDINARY_API_KEY", "k")
    monkeypatch.setattr(settings, "CLOUDINARY_API_SECRET", "s")

    assert isinstance(create_media_store(), CloudinaryMediaStore)


def test_factory_rejects_unknown_backend(monkeypatch):
    monkeypatch.setattr(settings, "MEDIA_BACKEND", "ftp")

    with pytest.raises(RuntimeError):
        create_media_store()
