from __future__ import annotations

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.sql import func

from swipematch.database import Base


def make_pair_key(user_a: str, user_b: str) -> str:
    """Order-independent key for an unordered pair of user ids."""
    low, high = sorted((str(user_a), str(user_b)))
    return f"{low}:{high}"


class Match(Base):
    __tablename__ = "matches"

    id = Column(Integer, primary_key=True, index=True)

    # user1 is whoever completed the mutual like; the pair itself is unordered.
    user1_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    user2_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    pair_key = Column(String(80), nullable=False)

    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint("pair_key", name="uq_matches_pair_key"),
    )

    def other_user_id(self, user_id: str) -> str:
        return self.user2_id if self.user1_id == user_id else self.user1_id
