from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from swipematch.schemas.user import PublicProfile


class LikeRequest(BaseModel):
    target_id: str = Field(min_length=1)


class LikeResponse(BaseModel):
    is_match: bool
    # True when the like was already recorded; the client can simply advance.
    already_liked: bool = False
    matched_user: PublicProfile | None = None


class MatchedProfile(PublicProfile):
    matched_at: datetime | None = None
