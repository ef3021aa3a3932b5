from __future__ import annotations

import logging
from typing import Callable

from fastapi import APIRouter, Depends, File, Query, UploadFile
from sqlalchemy.orm import Session

from swipematch.database import get_db
from swipematch.models.user import User
from swipematch.routers.dependencies import get_current_user
from swipematch.schemas.media import AvatarUploadResponse, PhotoDeleteResponse, PhotoUploadResponse, ReelUploadResponse
from swipematch.schemas.user import Reel
from swipematch.services import profile_service, storage_service
from swipematch.services.errors import InvalidUploadError, PersistenceError
from swipematch.services.storage_service import StoredObject


router = APIRouter(prefix="/uploads", tags=["media"])

logger = logging.getLogger(__name__)


def _record(stored: list[StoredObject], apply: Callable[[], User]) -> User:
    # Stored objects are removed again when the profile write fails.
    try:
        return apply()
    except PersistenceError:
        for obj in stored:
            storage_service.discard(obj)
        raise


@router.post("/photos", response_model=PhotoUploadResponse)
def upload_photos(
    files: list[UploadFile] = File(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> PhotoUploadResponse:
    response = PhotoUploadResponse()
    for upload in files:
        try:
            stored = storage_service.put_photo(current_user.id, upload.filename, upload.content_type, upload.file)
        except (InvalidUploadError, OSError) as exc:
            # One bad file does not fail the batch.
            logger.warning("media.photo_skipped user=%s file=%s reason=%s", current_user.id, upload.filename, exc)
            response.skipped.append(upload.filename or "")
            continue
        current_user = _record([stored], lambda: profile_service.append_photo(db, current_user, stored.url))
        response.urls.append(stored.url)
    return response


@router.post("/avatar", response_model=AvatarUploadResponse)
def upload_avatar(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> AvatarUploadResponse:
    stored = storage_service.put_photo(current_user.id, file.filename, file.content_type, file.file)
    _record([stored], lambda: profile_service.set_avatar(db, current_user, stored.url))
    return AvatarUploadResponse(url=stored.url)


@router.delete("/photos", response_model=PhotoDeleteResponse)
def delete_photo(
    url: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> PhotoDeleteResponse:
    removed = storage_service.delete_photo(current_user.id, url)
    current_user = profile_service.remove_photo(db, current_user, url)
    return PhotoDeleteResponse(removed=removed, photos=list(current_user.photos or []))


@router.post("/reels", response_model=ReelUploadResponse)
def upload_reel(
    video: UploadFile = File(...),
    thumbnail: UploadFile | None = File(default=None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ReelUploadResponse:
    stored = [storage_service.put_reel(current_user.id, video.filename, video.content_type, video.file)]
    if thumbnail is not None:
        try:
            stored.append(
                storage_service.put_reel_thumbnail(
                    current_user.id, thumbnail.filename, thumbnail.content_type, thumbnail.file
                )
            )
        except InvalidUploadError:
            storage_service.discard(stored[0])
            raise
    reel = Reel(url=stored[0].url, thumbnail=stored[1].url if len(stored) > 1 else None)
    current_user = _record(stored, lambda: profile_service.append_reel(db, current_user, reel.model_dump()))
    return ReelUploadResponse(reel=reel, reels=[Reel(**r) for r in (current_user.reels or [])])
