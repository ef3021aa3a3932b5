# auth.py
from datetime import timedelta

from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from swipematch.config import settings
from swipematch.database import get_db
from swipematch.models.user import User
from swipematch.schemas.user import Token, UserCreate, UserLogin, UserRead
from swipematch.services.errors import UnauthenticatedError
from swipematch.services.profile_service import authenticate, register_user
from swipematch.utils.jwt_handler import create_access_token


router = APIRouter()


def _issue_token(user: User) -> Token:
    expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    token = create_access_token({"sub": str(user.id)}, expires_delta)
    return Token(access_token=token, token_type="bearer")


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(user_in: UserCreate, db: Session = Depends(get_db)) -> UserRead:
    user = register_user(db, user_in)
    return UserRead.model_validate(user)


@router.post("/login", response_model=Token)
def login(user_in: UserLogin, db: Session = Depends(get_db)) -> Token:
    user = authenticate(db, user_in.email, user_in.password)
    if user is None:
        raise UnauthenticatedError("Invalid credentials")
    return _issue_token(user)


@router.post("/token", response_model=Token, include_in_schema=False)
def login_form(form: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)) -> Token:
    # OAuth2 password flow for the interactive docs.
    user = authenticate(db, form.username.strip().lower(), form.password)
    if user is None:
        raise UnauthenticatedError("Invalid credentials")
    return _issue_token(user)
