# match_service.py
"""Like/match protocol.

A match is a fact about likes: it exists exactly when Like(a->b) and
Like(b->a) both exist. The ``matches`` table is a materialization of that
fact, so ``is_match`` is always computed from the two like rows, and a
failure to write the match row never fails the request.

There is no transaction across the steps. Two concurrent calls for the same
pair are tolerated by the unique constraints on ``likes`` and ``matches``:
the losing insert comes back as ``InsertResult.DUPLICATE``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.orm import Session

from swipematch.db import store
from swipematch.db.store import InsertResult
from swipematch.models.match import Match
from swipematch.models.user import User
from swipematch.services.errors import NotFoundError, PersistenceError, SelfLikeError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActorContext:
    """The authenticated caller, resolved once per request from the session token."""

    user_id: str


@dataclass(frozen=True)
class LikeOutcome:
    is_match: bool
    already_liked: bool = False
    matched_user: User | None = None


@dataclass(frozen=True)
class ActiveMatch:
    user: User
    matched_at: datetime | None


def like_user(db: Session, actor: ActorContext, target_id: str) -> LikeOutcome:
    if target_id == actor.user_id:
        raise SelfLikeError("You cannot like your own profile")
    if not store.user_exists(db, target_id):
        raise NotFoundError("Invalid profile")

    already_liked = store.find_like(db, actor.user_id, target_id) is not None
    if already_liked:
        logger.info("like.exists actor=%s target=%s", actor.user_id, target_id)
    else:
        result = store.insert_like(db, actor.user_id, target_id)
        if result is InsertResult.DUPLICATE:
            # A concurrent call recorded the same like between our check and insert.
            logger.info("like.duplicate actor=%s target=%s", actor.user_id, target_id)
            already_liked = True
        else:
            logger.info("like.created actor=%s target=%s", actor.user_id, target_id)

    if store.find_like(db, target_id, actor.user_id) is None:
        return LikeOutcome(is_match=False, already_liked=already_liked)

    logger.info("like.mutual actor=%s target=%s", actor.user_id, target_id)
    _materialize_match(db, actor.user_id, target_id)

    matched_user = store.get_user(db, target_id)
    if matched_user is None:
        raise NotFoundError("Invalid profile")
    return LikeOutcome(is_match=True, already_liked=already_liked, matched_user=matched_user)


def _materialize_match(db: Session, user1_id: str, user2_id: str) -> bool:
    """Best-effort write of the match row. Returns True if a row was created."""
    try:
        result = store.insert_match(db, user1_id, user2_id)
    except PersistenceError:
        logger.exception("match.create_failed user1=%s user2=%s", user1_id, user2_id)
        return False
    if result is InsertResult.DUPLICATE:
        logger.debug("match.exists user1=%s user2=%s", user1_id, user2_id)
        return False
    logger.info("match.created user1=%s user2=%s", user1_id, user2_id)
    return True


def fetch_active_matches(db: Session, actor: ActorContext) -> list[ActiveMatch]:
    matches: list[Match] = store.active_matches_for(db, actor.user_id)
    results: list[ActiveMatch] = []
    for match in matches:
        other_id = match.other_user_id(actor.user_id)
        other = store.get_user(db, other_id)
        if other is None:
            logger.warning("match.orphan match_id=%s missing_user=%s", match.id, other_id)
            continue
        results.append(ActiveMatch(user=other, matched_at=match.created_at))
    return results


def reconcile_matches(db: Session) -> int:
    """Create any match row missing for a mutual like pair. Returns rows created."""
    created = 0
    pairs = store.mutual_like_pairs(db)
    for user_a, user_b in pairs:
        if store.find_match(db, user_a, user_b) is not None:
            continue
        if _materialize_match(db, user_a, user_b):
            created += 1
    logger.info("match.reconcile pairs=%s created=%s", len(pairs), created)
    return created
