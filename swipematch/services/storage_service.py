"""Local object storage for profile photos and reels.

Objects are plain files under ``MEDIA_ROOT/<bucket>/`` and are served read-only
under ``MEDIA_URL_PREFIX/<bucket>/``. Object names start with the owner's user
id, which is how ownership is checked on delete.
"""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from swipematch.config import media_dir, settings
from swipematch.services.errors import InvalidUploadError, UploadTooLargeError


logger = logging.getLogger(__name__)

PHOTO_BUCKET = "profile-photos"
REEL_BUCKET = "reels"

_MB = 1024 * 1024


@dataclass(frozen=True)
class StoredObject:
    bucket: str
    name: str
    url: str


def bucket_path(bucket: str) -> Path:
    path = media_dir(settings) / bucket
    path.mkdir(parents=True, exist_ok=True)
    return path


def public_url(bucket: str, name: str) -> str:
    prefix = settings.media_url_prefix.rstrip("/")
    return f"{prefix}/{bucket}/{name}"


def object_name(user_id: str, filename: str | None) -> str:
    ext = ""
    if filename and "." in filename:
        ext = filename.rsplit(".", 1)[-1].lower()
        ext = "".join(ch for ch in ext if ch.isalnum())[:8]
    stamp = int(time.time() * 1000)
    name = f"{user_id}-{stamp}-{uuid.uuid4().hex[:7]}"
    return f"{name}.{ext}" if ext else name


def _read_limited(stream: BinaryIO, max_bytes: int, filename: str | None) -> bytes:
    data = stream.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise UploadTooLargeError(f"{filename or 'file'} is larger than {max_bytes / _MB:g}MB")
    if not data:
        raise InvalidUploadError(f"{filename or 'file'} is empty")
    return data


def _put(bucket: str, user_id: str, filename: str | None, data: bytes) -> StoredObject:
    name = object_name(user_id, filename)
    target = bucket_path(bucket) / name
    # upsert=False: never overwrite an existing object.
    with target.open("xb") as fh:
        fh.write(data)
    logger.info("storage.put bucket=%s name=%s bytes=%s", bucket, name, len(data))
    return StoredObject(bucket=bucket, name=name, url=public_url(bucket, name))


def put_photo(user_id: str, filename: str | None, content_type: str | None, stream: BinaryIO) -> StoredObject:
    if not (content_type or "").startswith("image/"):
        raise InvalidUploadError("Please select an image file")
    data = _read_limited(stream, int(settings.max_photo_mb * _MB), filename)
    return _put(PHOTO_BUCKET, user_id, filename, data)


def put_reel(user_id: str, filename: str | None, content_type: str | None, stream: BinaryIO) -> StoredObject:
    if not (content_type or "").startswith("video/"):
        raise InvalidUploadError("Please select a video file")
    data = _read_limited(stream, int(settings.max_reel_mb * _MB), filename)
    return _put(REEL_BUCKET, user_id, filename, data)


def put_reel_thumbnail(user_id: str, filename: str | None, content_type: str | None, stream: BinaryIO) -> StoredObject:
    if not (content_type or "").startswith("image/"):
        raise InvalidUploadError("Thumbnail must be an image")
    data = _read_limited(stream, int(settings.max_photo_mb * _MB), filename)
    return _put(REEL_BUCKET, user_id, filename, data)


def delete_photo(user_id: str, url: str) -> bool:
    """Remove a photo owned by ``user_id``. Returns False if the object was already gone."""
    name = (url or "").rstrip("/").split("/")[-1]
    if not name or name in (".", "..") or not name.startswith(f"{user_id}-"):
        raise InvalidUploadError("Invalid photo URL")
    target = bucket_path(PHOTO_BUCKET) / name
    try:
        target.unlink()
    except FileNotFoundError:
        logger.warning("storage.delete_missing bucket=%s name=%s", PHOTO_BUCKET, name)
        return False
    logger.info("storage.delete bucket=%s name=%s", PHOTO_BUCKET, name)
    return True


def discard(stored: StoredObject) -> None:
    """Remove an object whose profile update failed."""
    target = bucket_path(stored.bucket) / stored.name
    target.unlink(missing_ok=True)
    logger.warning("storage.discard bucket=%s name=%s", stored.bucket, stored.name)
