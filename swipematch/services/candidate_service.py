from __future__ import annotations

from datetime import date
from typing import Any

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from swipematch.config import settings
from swipematch.db import store
from swipematch.models.user import User
from swipematch.services.errors import NotFoundError, PersistenceError
from swipematch.services.match_service import ActorContext


def _years_ago(today: date, years: int) -> date:
    try:
        return today.replace(year=today.year - years)
    except ValueError:
        # Feb 29 in a non-leap target year.
        return today.replace(year=today.year - years, day=28)


def _gender_preference(preferences: dict[str, Any] | None) -> list[str]:
    raw = (preferences or {}).get("gender_preference") or []
    if isinstance(raw, str):
        raw = [raw]
    return [str(g).strip().lower() for g in raw if g and str(g).strip()]


def _age_range(preferences: dict[str, Any] | None) -> tuple[int | None, int | None]:
    raw = (preferences or {}).get("age_range")
    if not isinstance(raw, dict):
        return None, None
    lo = raw.get("min")
    hi = raw.get("max")
    return (int(lo) if lo is not None else None, int(hi) if hi is not None else None)


def fetch_candidates(
    db: Session,
    actor: ActorContext,
    *,
    limit: int | None = None,
    today: date | None = None,
) -> list[User]:
    """Users the actor has not liked yet, filtered by the actor's stated preferences.

    An empty gender preference means no gender filtering. Age range applies only
    when the actor stored one, and users without a birthdate are never excluded
    by it. No ordering is imposed.
    """

    me = store.get_user(db, actor.user_id)
    if me is None:
        raise NotFoundError("Profile not found")

    cap = settings.candidate_limit if limit is None else limit
    preferences = me.preferences if isinstance(me.preferences, dict) else None

    q = db.query(User).filter(User.id != actor.user_id)

    already_liked = store.liked_user_ids(db, actor.user_id)
    if already_liked:
        q = q.filter(User.id.notin_(sorted(already_liked)))

    genders = _gender_preference(preferences)
    if genders:
        q = q.filter(User.gender.in_(genders))

    min_age, max_age = _age_range(preferences)
    if min_age is not None or max_age is not None:
        today = today or date.today()
        if min_age is not None:
            q = q.filter(or_(User.birthdate.is_(None), User.birthdate <= _years_ago(today, min_age)))
        if max_age is not None:
            q = q.filter(or_(User.birthdate.is_(None), User.birthdate > _years_ago(today, max_age + 1)))

    try:
        return q.limit(cap).all()
    except SQLAlchemyError as exc:
        raise PersistenceError("failed to fetch potential matches") from exc
