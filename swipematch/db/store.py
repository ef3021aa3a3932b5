"""Record access for users, likes and matches.

Every function issues a fresh query; nothing is cached between calls.
Inserts report a unique-key collision as ``InsertResult.DUPLICATE`` so callers
branch on a typed result instead of inspecting driver error codes. Any other
database failure is raised as ``PersistenceError``.
"""

from __future__ import annotations

import enum
from contextlib import contextmanager
from typing import Any, Callable, Iterator

from sqlalchemy import and_, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, aliased

from swipematch.models.like import Like
from swipematch.models.match import Match, make_pair_key
from swipematch.models.user import User
from swipematch.services.errors import PersistenceError


class InsertResult(enum.Enum):
    CREATED = "created"
    DUPLICATE = "duplicate"


@contextmanager
def _reading(what: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        raise PersistenceError(f"Database query failed: {what}") from exc


def _insert(db: Session, row: Any, already_exists: Callable[[], bool], what: str) -> InsertResult:
    db.add(row)
    try:
        db.commit()
        return InsertResult.CREATED
    except IntegrityError as exc:
        db.rollback()
        # A unique violation means the row we wanted is now there. Any other
        # integrity failure (FK, CHECK) leaves nothing behind.
        with _reading(what):
            if already_exists():
                return InsertResult.DUPLICATE
        raise PersistenceError(f"Failed to create {what}: {exc.orig}") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise PersistenceError(f"Failed to create {what}") from exc


# users


def get_user(db: Session, user_id: str) -> User | None:
    with _reading("user"):
        return db.query(User).filter(User.id == user_id).one_or_none()


def get_user_by_email(db: Session, email: str) -> User | None:
    with _reading("user"):
        return db.query(User).filter(User.email == email).one_or_none()


def get_user_by_username(db: Session, username: str) -> User | None:
    with _reading("user"):
        return db.query(User).filter(User.username == username).one_or_none()


def user_exists(db: Session, user_id: str) -> bool:
    with _reading("user"):
        return db.query(User.id).filter(User.id == user_id).first() is not None


def insert_user(db: Session, user: User) -> User:
    db.add(user)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise PersistenceError("Failed to create user") from exc
    db.refresh(user)
    return user


def update_user(db: Session, user: User, fields: dict[str, Any]) -> User:
    for field, value in fields.items():
        setattr(user, field, value)
    db.add(user)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise PersistenceError("Failed to update user") from exc
    db.refresh(user)
    return user


# likes


def find_like(db: Session, from_user_id: str, to_user_id: str) -> Like | None:
    with _reading("like"):
        return (
            db.query(Like)
            .filter(Like.from_user_id == from_user_id, Like.to_user_id == to_user_id)
            .one_or_none()
        )


def liked_user_ids(db: Session, from_user_id: str) -> set[str]:
    with _reading("likes"):
        return {to_id for (to_id,) in db.query(Like.to_user_id).filter(Like.from_user_id == from_user_id).all()}


def insert_like(db: Session, from_user_id: str, to_user_id: str) -> InsertResult:
    return _insert(
        db,
        Like(from_user_id=from_user_id, to_user_id=to_user_id),
        lambda: find_like(db, from_user_id, to_user_id) is not None,
        "like",
    )


def mutual_like_pairs(db: Session) -> list[tuple[str, str]]:
    """Every (a, b) with Like(a->b) and Like(b->a), each unordered pair reported once."""
    reverse = aliased(Like)
    with _reading("likes"):
        rows = (
            db.query(Like.from_user_id, Like.to_user_id)
            .join(
                reverse,
                and_(reverse.from_user_id == Like.to_user_id, reverse.to_user_id == Like.from_user_id),
            )
            .filter(Like.from_user_id < Like.to_user_id)
            .all()
        )
    return [(a, b) for a, b in rows]


# matches


def find_match(db: Session, user_a: str, user_b: str) -> Match | None:
    with _reading("match"):
        return db.query(Match).filter(Match.pair_key == make_pair_key(user_a, user_b)).one_or_none()


def insert_match(db: Session, user1_id: str, user2_id: str) -> InsertResult:
    return _insert(
        db,
        Match(
            user1_id=user1_id,
            user2_id=user2_id,
            pair_key=make_pair_key(user1_id, user2_id),
            is_active=True,
        ),
        lambda: find_match(db, user1_id, user2_id) is not None,
        "match",
    )


def active_matches_for(db: Session, user_id: str) -> list[Match]:
    with _reading("matches"):
        return (
            db.query(Match)
            .filter(or_(Match.user1_id == user_id, Match.user2_id == user_id))
            .filter(Match.is_active.is_(True))
            .all()
        )
