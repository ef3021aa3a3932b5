# users.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from swipematch.database import get_db
from swipematch.routers.dependencies import get_actor
from swipematch.schemas.user import PublicProfile, UserRead, UserUpdate
from swipematch.services.match_service import ActorContext
from swipematch.services.profile_service import get_current_profile, get_profile, update_profile


router = APIRouter()


@router.get("/me", response_model=UserRead)
def read_current_user(db: Session = Depends(get_db), actor: ActorContext = Depends(get_actor)) -> UserRead:
    return get_current_profile(db, actor)


@router.put("/me", response_model=UserRead)
def update_current_user(
    update: UserUpdate,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
) -> UserRead:
    update_profile(db, actor, update)
    return get_current_profile(db, actor)


@router.get("/{user_id}", response_model=PublicProfile)
def read_user(
    user_id: str,
    db: Session = Depends(get_db),
    _actor: ActorContext = Depends(get_actor),
) -> PublicProfile:
    return PublicProfile.model_validate(get_profile(db, user_id))
