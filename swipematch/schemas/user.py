# user.py
from __future__ import annotations

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


Gender = Literal["male", "female", "other"]


def _validate_email_like(v: str) -> str:
    value = (v or "").strip()
    if "@" not in value:
        raise ValueError("email must contain '@'")
    left, right = value.split("@", 1)
    if not left or not right:
        raise ValueError("email must have text before and after '@'")
    return value.lower()


class AgeRange(BaseModel):
    min: int = Field(default=18, ge=18, le=120)
    max: int = Field(default=99, ge=18, le=120)

    @model_validator(mode="after")
    def _check_order(self) -> "AgeRange":
        if self.min > self.max:
            raise ValueError("age_range.min must not exceed age_range.max")
        return self


class Preferences(BaseModel):
    age_range: Optional[AgeRange] = None
    distance: Optional[int] = Field(default=None, ge=0)
    # Empty list means "no restriction".
    gender_preference: list[Gender] = Field(default_factory=list)
    dealbreakers: list[str] = Field(default_factory=list)

    @field_validator("gender_preference", "dealbreakers", mode="before")
    @classmethod
    def _none_as_empty(cls, v):
        return [] if v is None else v


class Lifestyle(BaseModel):
    smoking: Optional[str] = None
    drinking: Optional[str] = None
    exercise: Optional[str] = None
    pets: Optional[str] = None


class Prompt(BaseModel):
    question: str
    answer: str
    image: Optional[str] = None


class Reel(BaseModel):
    url: str
    thumbnail: Optional[str] = None


class UserCreate(BaseModel):
    email: str
    password: str = Field(min_length=8)
    full_name: Optional[str] = None
    username: Optional[str] = Field(default=None, min_length=3, max_length=64)
    gender: Optional[Gender] = None
    birthdate: Optional[date] = None

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return _validate_email_like(v)


class UserLogin(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return _validate_email_like(v)


class PublicProfile(BaseModel):
    """What other users see on a card or in the matches list."""

    id: str
    full_name: Optional[str] = None
    username: Optional[str] = None
    gender: Optional[str] = None
    birthdate: Optional[date] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    location: Optional[str] = None
    occupation: Optional[str] = None
    education: Optional[str] = None
    height: Optional[int] = None
    photos: list[str] = Field(default_factory=list)
    reels: list[Reel] = Field(default_factory=list)
    interests: list[str] = Field(default_factory=list)
    languages: list[str] = Field(default_factory=list)
    prompts: list[Prompt] = Field(default_factory=list)
    relationship_goals: Optional[str] = None
    preferences: Optional[Preferences] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("photos", "reels", "interests", "languages", "prompts", mode="before")
    @classmethod
    def _none_as_empty(cls, v):
        return [] if v is None else v


class UserRead(PublicProfile):
    email: Optional[str] = None
    lifestyle: Optional[Lifestyle] = None
    instagram: Optional[str] = None
    spotify: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserUpdate(BaseModel):
    full_name: Optional[str] = None
    username: Optional[str] = Field(default=None, min_length=3, max_length=64)
    bio: Optional[str] = None
    gender: Optional[Gender] = None
    birthdate: Optional[date] = None
    avatar_url: Optional[str] = None
    location: Optional[str] = None
    occupation: Optional[str] = None
    education: Optional[str] = None
    height: Optional[int] = Field(default=None, gt=0, lt=300)
    photos: Optional[list[str]] = None
    interests: Optional[list[str]] = None
    languages: Optional[list[str]] = None
    lifestyle: Optional[Lifestyle] = None
    prompts: Optional[list[Prompt]] = None
    instagram: Optional[str] = None
    spotify: Optional[str] = None
    relationship_goals: Optional[str] = None
    preferences: Optional[Preferences] = None


class Token(BaseModel):
    access_token: str
    token_type: str


class TokenData(BaseModel):
    user_id: str
