from __future__ import annotations

import os
import tempfile
from typing import Any, Callable, Iterator

import pytest
from fastapi.testclient import TestClient


def pytest_configure() -> None:
    # Ensure the SQLAlchemy engine is created against sqlite for tests.
    os.environ["DB_URL"] = "sqlite:///./test.db"
    os.environ["ENVIRONMENT"] = "test"
    os.environ["JWT_SECRET"] = "test-secret"
    os.environ["MEDIA_ROOT"] = tempfile.mkdtemp(prefix="swipematch-media-")


def reset_database() -> None:
    from swipematch.database import Base, engine
    from swipematch.models import Like, Match, User  # noqa: F401

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


@pytest.fixture()
def client() -> Iterator[TestClient]:
    from swipematch.main import create_app

    reset_database()
    app = create_app()
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def db() -> Iterator[Any]:
    from swipematch.database import SessionLocal

    reset_database()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def make_user(db) -> Callable[..., Any]:
    from swipematch.models.user import User

    def _make(user_id: str, **fields: Any) -> User:
        user = User(id=user_id, full_name=fields.pop("full_name", f"User {user_id}"), **fields)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make
