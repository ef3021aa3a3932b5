from __future__ import annotations

from pydantic import BaseModel, Field

from swipematch.schemas.user import Reel


class PhotoUploadResponse(BaseModel):
    urls: list[str] = Field(default_factory=list)
    # Client filenames that were rejected (wrong type, too large, write error).
    skipped: list[str] = Field(default_factory=list)


class AvatarUploadResponse(BaseModel):
    url: str


class PhotoDeleteResponse(BaseModel):
    removed: bool
    photos: list[str] = Field(default_factory=list)


class ReelUploadResponse(BaseModel):
    reel: Reel
    reels: list[Reel] = Field(default_factory=list)
