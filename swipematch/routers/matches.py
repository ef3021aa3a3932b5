from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from swipematch.database import get_db
from swipematch.routers.dependencies import get_actor
from swipematch.schemas.match import MatchedProfile
from swipematch.schemas.user import PublicProfile
from swipematch.services.match_service import ActorContext, fetch_active_matches


router = APIRouter(prefix="/matches", tags=["matches"])


@router.get("", response_model=list[MatchedProfile])
def list_matches(
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
) -> list[MatchedProfile]:
    results: list[MatchedProfile] = []
    for item in fetch_active_matches(db, actor):
        profile = PublicProfile.model_validate(item.user)
        results.append(MatchedProfile(**profile.model_dump(), matched_at=item.matched_at))
    return results
