# dependencies.py
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from swipematch.database import get_db
from swipematch.db import store
from swipematch.models.user import User
from swipematch.schemas.user import TokenData
from swipematch.services.errors import UnauthenticatedError
from swipematch.services.match_service import ActorContext
from swipematch.utils.jwt_handler import decode_access_token


# auto_error=False so a missing token is reported through the same error body as a bad one.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token", auto_error=False)


def get_actor(db: Session = Depends(get_db), token: str | None = Depends(oauth2_scheme)) -> ActorContext:
    if not token:
        raise UnauthenticatedError("Not authenticated")
    payload = decode_access_token(token)
    user_id = payload.get("sub")
    if not user_id:
        raise UnauthenticatedError("Invalid token payload")
    token_data = TokenData(user_id=str(user_id))
    if not store.user_exists(db, token_data.user_id):
        raise UnauthenticatedError("User not found")
    return ActorContext(user_id=token_data.user_id)


def get_current_user(db: Session = Depends(get_db), actor: ActorContext = Depends(get_actor)) -> User:
    user = store.get_user(db, actor.user_id)
    if user is None:
        raise UnauthenticatedError("User not found")
    return user
