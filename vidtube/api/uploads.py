# vidtube/api/uploads.py
"""
Multipart uploads are written to UPLOAD_TEMP_DIR before they go to the media
store. The store removes a file once it has consumed it; spooled() removes
whatever is left when the request finishes.
"""
from __future__ import annotations

import logging
import os
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

from fastapi import UploadFile

from vidtube.core.config import settings
from vidtube.core.errors import InvalidArgument

logger = logging.getLogger(__name__)

CHUNK = 1024 * 1024


def save_upload(upload: UploadFile, temp_dir: str | None = None) -> str:
    directory = Path(temp_dir or settings.UPLOAD_TEMP_DIR)
    directory.mkdir(parents=True, exist_ok=True)

    suffix = Path(upload.filename or "").suffix.lower()
    dest = directory / f"{uuid.uuid4().hex}{suffix}"
    max_bytes = settings.MAX_UPLOAD_MB * 1024 * 1024

    written = 0
    try:
        with open(dest, "wb") as out:
            while True:
                chunk = upload.file.read(CHUNK)
                if not chunk:
                    break
                written += len(chunk)
                if written > max_bytes:
                    raise InvalidArgument(f"File too large. Max {settings.MAX_UPLOAD_MB} MB")
                out.write(chunk)
    except InvalidArgument:
        dest.unlink(missing_ok=True)
        raise

    if written == 0:
        dest.unlink(missing_ok=True)
        raise InvalidArgument(f"Uploaded file '{upload.filename}' is empty")
    return str(dest)


def _present(upload: Optional[UploadFile]) -> bool:
    return upload is not None and bool(upload.filename)


@contextmanager
def spooled(*uploads: Optional[UploadFile]) -> Iterator[List[Optional[str]]]:
    """Yields one local path (or None) per upload, in order."""
    paths: List[Optional[str]] = []
    try:
        for upload in uploads:
            paths.append(save_upload(upload) if _present(upload) else None)
        yield paths
    finally:
        for path in paths:
            if path and os.path.exists(path):
                try:
                    os.remove(path)
                except OSError as e:
                    logger.warning(f"Could not remove temp upload {path}: {e}")
