# profile_service.py
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from swipematch.db import store
from swipematch.models.user import User
from swipematch.schemas.user import UserCreate, UserRead, UserUpdate
from swipematch.services.errors import ConflictError, NotFoundError, PersistenceError
from swipematch.services.match_service import ActorContext
from swipematch.utils.password_hash import hash_password, verify_password


logger = logging.getLogger(__name__)


DEFAULT_LIFESTYLE: dict[str, str] = {
    "smoking": "Never",
    "drinking": "Socially",
    "exercise": "Active",
    "pets": "Dog lover",
}

# Neither gender nor age filters discover until the user sets them.
DEFAULT_PREFERENCES: dict[str, Any] = {
    "age_range": None,
    "distance": 50,
    "gender_preference": [],
    "dealbreakers": [],
}


def get_profile(db: Session, user_id: str) -> User:
    user = store.get_user(db, user_id)
    if user is None:
        raise NotFoundError("Profile not found")
    return user


def get_current_profile(db: Session, actor: ActorContext) -> UserRead:
    user = get_profile(db, actor.user_id)
    profile = UserRead.model_validate(user)
    updates: dict[str, Any] = {}
    if user.lifestyle is None:
        updates["lifestyle"] = DEFAULT_LIFESTYLE
    if user.preferences is None:
        updates["preferences"] = DEFAULT_PREFERENCES
    if not updates:
        return profile
    # Re-validate so the defaults become typed sub-models.
    return UserRead.model_validate({**profile.model_dump(), **updates})


def _profile_fields(payload: UserUpdate) -> dict[str, Any]:
    fields = payload.model_dump(exclude_unset=True, mode="json")
    # Dates go back to the ORM as date objects, not ISO strings.
    if "birthdate" in fields:
        fields["birthdate"] = payload.birthdate
    return fields


def update_profile(db: Session, actor: ActorContext, payload: UserUpdate) -> User:
    user = get_profile(db, actor.user_id)
    fields = _profile_fields(payload)

    username = fields.get("username")
    if username and username != user.username:
        other = store.get_user_by_username(db, username)
        if other is not None and other.id != user.id:
            raise ConflictError("Username already taken")

    updated = store.update_user(db, user, fields)
    logger.info("profile.updated user=%s fields=%s", user.id, ",".join(sorted(fields)))
    return updated


def register_user(db: Session, user_in: UserCreate, profile: UserUpdate | None = None) -> User:
    """Create an account, optionally with profile fields, in a single insert."""
    user = User(
        email=user_in.email,
        password=hash_password(user_in.password),
        full_name=user_in.full_name,
        username=user_in.username,
        gender=user_in.gender,
        birthdate=user_in.birthdate,
    )
    if profile is not None:
        for field, value in _profile_fields(profile).items():
            setattr(user, field, value)

    if store.get_user_by_email(db, user.email) is not None:
        raise ConflictError("Email already registered")
    if user.username and store.get_user_by_username(db, user.username) is not None:
        raise ConflictError("Username already taken")

    user = store.insert_user(db, user)
    logger.info("user.registered user=%s", user.id)
    return user


def authenticate(db: Session, email: str, password: str) -> User | None:
    user = store.get_user_by_email(db, email)
    if user is None or not user.password:
        return None
    if not verify_password(password, user.password):
        return None
    return user


def append_photo(db: Session, user: User, url: str) -> User:
    photos = list(user.photos or [])
    photos.append(url)
    return store.update_user(db, user, {"photos": photos})


def remove_photo(db: Session, user: User, url: str) -> User:
    photos = [p for p in (user.photos or []) if p != url]
    fields: dict[str, Any] = {"photos": photos}
    if user.avatar_url == url:
        fields["avatar_url"] = None
    return store.update_user(db, user, fields)


def append_reel(db: Session, user: User, reel: dict[str, Any]) -> User:
    reels = list(user.reels or [])
    reels.append(reel)
    return store.update_user(db, user, {"reels": reels})


def set_avatar(db: Session, user: User, url: str) -> User:
    photos = list(user.photos or [])
    if url not in photos:
        photos.insert(0, url)
    return store.update_user(db, user, {"avatar_url": url, "photos": photos})


def import_accounts(db: Session, records: list[dict[str, Any]]) -> tuple[int, int, int]:
    """Create login accounts from exported profile records.

    Each record needs ``email`` and ``password``; other keys are profile fields.
    Returns (created, skipped, failed). Existing emails are skipped.
    """

    created = skipped = failed = 0
    for record in records:
        email = str(record.get("email") or "").strip().lower()
        password = record.get("password")
        if not email or not password:
            logger.error("import.invalid_record email=%s", email or "<missing>")
            failed += 1
            continue
        if store.get_user_by_email(db, email) is not None:
            skipped += 1
            continue
        profile = {k: v for k, v in record.items() if k not in ("email", "password")}
        try:
            # Validated in full before anything is inserted.
            payload = UserCreate(email=email, password=str(password))
            user = register_user(db, payload, UserUpdate.model_validate(profile) if profile else None)
        except (ValueError, ConflictError, PersistenceError) as exc:
            logger.error("import.failed email=%s reason=%s", email, exc)
            failed += 1
            continue
        logger.info("import.created email=%s user=%s", email, user.id)
        created += 1
    return created, skipped, failed
