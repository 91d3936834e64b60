# vidtube/services/media_store.py
"""
Media store adapter.

Binary assets (video files, thumbnails) never touch the database: they are
uploaded to a media host and only the returned URL and opaque public id are
stored on the Video row. The public id is used for nothing except deletion.

Backends:
  local       copies into MEDIA_ROOT, served by main.py under MEDIA_URL_PREFIX
  cloudinary  Cloudinary via the cloudinary SDK

Settings (.env):
  MEDIA_BACKEND=cloudinary
  CLOUDINARY_CLOUD_NAME=...
  CLOUDINARY_API_KEY=...
  CLOUDINARY_API_SECRET=...

upload() returns None on any failure and always removes the local temp file.
delete() never raises; failures are logged and None is returned.
"""
from __future__ import annotations

import logging
import mimetypes
import os
import shutil
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import cloudinary
import cloudinary.exceptions
import cloudinary.uploader

from vidtube.core.config import settings

logger = logging.getLogger(__name__)


@dataclass
class MediaAsset:
    url: str
    public_id: str
    resource_type: str = "raw"
    duration: Optional[float] = None


def guess_resource_type(path: str) -> str:
    mime, _ = mimetypes.guess_type(path)
    if mime:
        if mime.startswith("video/") or mime.startswith("audio/"):
            return "video"
        if mime.startswith("image/"):
            return "image"
    return "raw"


def _remove_quietly(path: str) -> None:
    try:
        if path and os.path.exists(path):
            os.remove(path)
    except OSError as e:
        logger.warning(f"Could not remove temp file {path}: {e}")


class MediaStore:
    def upload(self, local_path: str | None) -> Optional[MediaAsset]:
        raise NotImplementedError

    def delete(self, public_id: str | None, resource_type: str = "image") -> Optional[dict]:
        raise NotImplementedError


# ── Local directory ───────────────────────────────────────────
class LocalMediaStore(MediaStore):
    def __init__(self, root: str, url_prefix: str = "/media"):
        self.root = Path(root)
        self.url_prefix = url_prefix.rstrip("/")
        self.root.mkdir(parents=True, exist_ok=True)

    def upload(self, local_path: str | None) -> Optional[MediaAsset]:
        if not local_path:
            return None
        try:
            if not os.path.exists(local_path):
                logger.error(f"Local media upload: file does not exist: {local_path}")
                return None

            ext = Path(local_path).suffix.lower()
            public_id = uuid.uuid4().hex
            dest = self.root / f"{public_id}{ext}"
            shutil.copyfile(local_path, dest)
            return MediaAsset(
                url=f"{self.url_prefix}/{dest.name}",
                public_id=dest.name,
                resource_type=guess_resource_type(local_path),
            )
        except OSError as e:
            logger.error(f"Local media upload failed for {local_path}: {e}")
            return None
        finally:
            _remove_quietly(local_path)

    def delete(self, public_id: str | None, resource_type: str = "image") -> Optional[dict]:
        if not public_id:
            return None
        target = (self.root / public_id).resolve()
        if target.parent != self.root.resolve():
            logger.error(f"Refusing to delete outside media root: {public_id}")
            return None
        try:
            if not target.exists():
                return {"result": "not found"}
            target.unlink()
            return {"result": "ok"}
        except OSError as e:
            logger.error(f"Local media delete failed for {public_id}: {e}")
            return None


# ── Cloudinary ────────────────────────────────────────────────
class CloudinaryMediaStore(MediaStore):
    """
    Cloudinary through the official SDK.

    Video files above large_upload_bytes go through upload_large, which sends
    the file in chunk_size pieces; everything else is a single upload with
    resource_type="auto".
    """

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        timeout: float = 120.0,
        large_upload_bytes: int = 100 * 1024 * 1024,
        chunk_size: int = 20 * 1024 * 1024,
    ):
        self.cloud_name = cloud_name
        self.timeout = timeout
        self.large_upload_bytes = large_upload_bytes
        self.chunk_size = chunk_size
        cloudinary.config(
            cloud_name=cloud_name,
            api_key=api_key,
            api_secret=api_secret,
            secure=True,
        )

    def _send(self, local_path: str) -> dict:
        kind = guess_resource_type(local_path)
        if kind == "video" and os.path.getsize(local_path) > self.large_upload_bytes:
            logger.info(f"Cloudinary: chunked upload for {local_path}")
            return cloudinary.uploader.upload_large(
                local_path,
                resource_type="video",
                chunk_size=self.chunk_size,
                timeout=self.timeout,
            )
        return cloudinary.uploader.upload(local_path, resource_type="auto", timeout=self.timeout)

    def upload(self, local_path: str | None) -> Optional[MediaAsset]:
        if not local_path:
            return None
        try:
            if not os.path.exists(local_path):
                logger.error(f"Cloudinary upload: file does not exist: {local_path}")
                return None

            data = self._send(local_path)
            if not isinstance(data, dict) or not (data.get("secure_url") or data.get("url")):
                logger.error(f"Cloudinary upload returned no URL for {local_path}: {data}")
                return None
            return MediaAsset(
                url=data.get("secure_url") or data["url"],
                public_id=data.get("public_id", ""),
                resource_type=data.get("resource_type", "raw"),
                duration=data.get("duration"),
            )
        except (cloudinary.exceptions.Error, OSError, ValueError) as e:
            logger.error(f"Cloudinary upload failed for {local_path}: {e}")
            return None
        finally:
            _remove_quietly(local_path)

    def delete(self, public_id: str | None, resource_type: str = "image") -> Optional[dict]:
        if not public_id:
            return None
        try:
            result = cloudinary.uploader.destroy(public_id, resource_type=resource_type, timeout=self.timeout)
        except (cloudinary.exceptions.Error, ValueError) as e:
            logger.error(f"Cloudinary delete failed for {resource_type}/{public_id}: {e}")
            return None
        if not isinstance(result, dict) or result.get("result") not in ("ok", "not found"):
            logger.error(f"Cloudinary delete for {resource_type}/{public_id} returned {result}")
            return None
        return result


# ── Factory ───────────────────────────────────────────────────
_store: MediaStore | None = None


def create_media_store() -> MediaStore:
    backend = (settings.MEDIA_BACKEND or "local").strip().lower()
    if backend == "cloudinary":
        missing = [
            name for name in ("CLOUDINARY_CLOUD_NAME", "CLOUDINARY_API_KEY", "CLOUDINARY_API_SECRET")
            if not getattr(settings, name)
        ]
        if missing:
            raise RuntimeError(f"Cloudinary media store is not configured: {', '.join(missing)}")
        logger.info(f"Media store: cloudinary ({settings.CLOUDINARY_CLOUD_NAME})")
        return CloudinaryMediaStore(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            timeout=settings.CLOUDINARY_TIMEOUT,
            large_upload_bytes=settings.CLOUDINARY_LARGE_UPLOAD_MB * 1024 * 1024,
            chunk_size=settings.CLOUDINARY_CHUNK_MB * 1024 * 1024,
        )
    if backend != "local":
        raise RuntimeError(f"Unknown MEDIA_BACKEND: {settings.MEDIA_BACKEND}")

    logger.info(f"Media store: local directory {settings.MEDIA_ROOT}")
    return LocalMediaStore(settings.MEDIA_ROOT, settings.MEDIA_URL_PREFIX)


def get_media_store() -> MediaStore:
    """FastAPI dependency. Tests override it through app.dependency_overrides."""
    global _store
    if _store is None:
        _store = create_media_store()
    return _store


def delete_quietly(store: MediaStore, public_id: str | None, resource_type: str) -> None:
    """Best-effort cleanup; orphaned assets are logged, never raised."""
    if not public_id:
        return
    result = store.delete(public_id, resource_type)
    if result is None:
        logger.warning(f"Media asset left behind: {resource_type}/{public_id}")
