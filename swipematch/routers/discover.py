from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from swipematch.database import get_db
from swipematch.routers.dependencies import get_actor
from swipematch.schemas.match import LikeRequest, LikeResponse
from swipematch.schemas.user import PublicProfile
from swipematch.services.candidate_service import fetch_candidates
from swipematch.services.match_service import ActorContext, like_user


router = APIRouter(prefix="/discover", tags=["discover"])


@router.get("/candidates", response_model=list[PublicProfile])
def list_candidates(
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
) -> list[PublicProfile]:
    return [PublicProfile.model_validate(u) for u in fetch_candidates(db, actor)]


@router.post("/like", response_model=LikeResponse)
def like(
    payload: LikeRequest,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
) -> LikeResponse:
    outcome = like_user(db, actor, payload.target_id)
    matched = PublicProfile.model_validate(outcome.matched_user) if outcome.matched_user is not None else None
    return LikeResponse(is_match=outcome.is_match, already_liked=outcome.already_liked, matched_user=matched)
