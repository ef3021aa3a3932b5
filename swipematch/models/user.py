# user.py
import uuid

from sqlalchemy import JSON, Column, Date, DateTime, Integer, String, Text
from sqlalchemy.sql import func

from swipematch.database import Base


def _new_user_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, index=True, default=_new_user_id)
    # Imported or seeded profiles may not have login credentials yet.
    email = Column(String(255), unique=True, index=True, nullable=True)
    password = Column(String(255), nullable=True)

    full_name = Column(String(255), nullable=True)
    username = Column(String(64), unique=True, index=True, nullable=True)
    gender = Column(String(16), nullable=True, index=True)
    birthdate = Column(Date, nullable=True)
    bio = Column(Text, nullable=True)
    avatar_url = Column(String(512), nullable=True)

    location = Column(String(255), nullable=True)
    occupation = Column(String(255), nullable=True)
    education = Column(String(255), nullable=True)
    height = Column(Integer, nullable=True)

    photos = Column(JSON, nullable=True)
    reels = Column(JSON, nullable=True)
    interests = Column(JSON, nullable=True)
    languages = Column(JSON, nullable=True)
    lifestyle = Column(JSON, nullable=True)
    prompts = Column(JSON, nullable=True)
    # {"age_range": {"min", "max"}, "distance", "gender_preference": [...], "dealbreakers": [...]}
    preferences = Column(JSON, nullable=True)

    instagram = Column(String(255), nullable=True)
    spotify = Column(String(255), nullable=True)
    relationship_goals = Column(String(255), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
