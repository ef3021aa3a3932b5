from __future__ import annotations

from datetime import date

from swipematch.database import SessionLocal
from swipematch.db import store
from swipematch.models.like import Like
from swipematch.models.match import Match
from swipematch.models.user import User
from swipematch.services.errors import PersistenceError


def _register_and_login(client, email: str, password: str = "SecretPass123", **profile) -> tuple[str, dict[str, str]]:
    r = client.post("/auth/register", json={"email": email, "password": password, **profile})
    assert r.status_code == 201
    user_id = r.json()["id"]
    r = client.post("/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200
    return user_id, {"Authorization": f"Bearer {r.json()['access_token']}"}


def _seed(*users: User) -> None:
    with SessionLocal() as db:
        db.add_all(users)
        db.commit()


def test_candidates_exclude_self_and_honour_gender_preference(client) -> None:
    me, headers = _register_and_login(client, "me@example.com", gender="male")
    _seed(
        User(id="f1", full_name="F1", gender="female"),
        User(id="f2", full_name="F2", gender="female"),
        User(id="m1", full_name="M1", gender="male"),
        User(id="o1", full_name="O1", gender="other"),
    )

    r = client.put("/users/me", json={"preferences": {"gender_preference": ["female"]}}, headers=headers)
    assert r.status_code == 200

    r = client.get("/discover/candidates", headers=headers)
    assert r.status_code == 200
    ids = {c["id"] for c in r.json()}
    assert ids == {"f1", "f2"}
    assert me not in ids


def test_empty_gender_preference_means_no_filter(client) -> None:
    me, headers = _register_and_login(client, "open@example.com")
    _seed(
        User(id="f1", gender="female"),
        User(id="m1", gender="male"),
        User(id="n1", gender=None),
    )

    # Unset preferences and an explicit empty list behave the same.
    r = client.get("/discover/candidates", headers=headers)
    assert {c["id"] for c in r.json()} == {"f1", "m1", "n1"}

    client.put("/users/me", json={"preferences": {"gender_preference": []}}, headers=headers)
    r = client.get("/discover/candidates", headers=headers)
    assert {c["id"] for c in r.json()} == {"f1", "m1", "n1"}
    assert me not in {c["id"] for c in r.json()}


def test_candidates_skip_already_liked_users(client) -> None:
    _, headers = _register_and_login(client, "liker@example.com")
    _seed(User(id="x1"), User(id="x2"))

    r = client.post("/discover/like", json={"target_id": "x1"}, headers=headers)
    assert r.status_code == 200

    r = client.get("/discover/candidates", headers=headers)
    assert {c["id"] for c in r.json()} == {"x2"}


def test_age_range_applies_only_when_set(client) -> None:
    _, headers = _register_and_login(client, "ages@example.com")
    today = date.today()
    _seed(
        User(id="young", birthdate=date(today.year - 20, 1, 1)),
        User(id="mid", birthdate=date(today.year - 30, 1, 1)),
        User(id="old", birthdate=date(today.year - 50, 1, 1)),
        User(id="unknown", birthdate=None),
    )

    r = client.get("/discover/candidates", headers=headers)
    assert {c["id"] for c in r.json()} == {"young", "mid", "old", "unknown"}

    client.put("/users/me", json={"preferences": {"age_range": {"min": 25, "max": 40}}}, headers=headers)
    r = client.get("/discover/candidates", headers=headers)
    assert {c["id"] for c in r.json()} == {"mid", "unknown"}


def test_candidates_are_capped_at_fifty(client) -> None:
    _, headers = _register_and_login(client, "crowd@example.com")
    _seed(*[User(id=f"u{i:03d}") for i in range(60)])

    r = client.get("/discover/candidates", headers=headers)
    assert r.status_code == 200
    assert len(r.json()) == 50


def test_end_to_end_like_then_match(client) -> None:
    a_id, a_headers = _register_and_login(client, "a@example.com", full_name="Ada")
    b_id, b_headers = _register_and_login(client, "b@example.com", full_name="Bo")

    r = client.post("/discover/like", json={"target_id": b_id}, headers=a_headers)
    assert r.status_code == 200
    assert r.json() == {"is_match": False, "already_liked": False, "matched_user": None}

    r = client.post("/discover/like", json={"target_id": a_id}, headers=b_headers)
    assert r.status_code == 200
    body = r.json()
    assert body["is_match"] is True
    assert body["matched_user"]["id"] == a_id
    assert body["matched_user"]["full_name"] == "Ada"

    with SessionLocal() as db:
        assert db.query(Like).count() == 2
        matches = db.query(Match).all()
        assert len(matches) == 1
        assert (matches[0].user1_id, matches[0].user2_id) == (b_id, a_id)
        assert matches[0].is_active is True


def test_repeat_like_reports_already_liked(client) -> None:
    _, headers = _register_and_login(client, "twice@example.com")
    _seed(User(id="t1"))

    first = client.post("/discover/like", json={"target_id": "t1"}, headers=headers)
    second = client.post("/discover/like", json={"target_id": "t1"}, headers=headers)

    assert first.json()["already_liked"] is False
    assert second.status_code == 200
    assert second.json()["already_liked"] is True
    with SessionLocal() as db:
        assert db.query(Like).count() == 1


def test_like_errors_carry_codes(client) -> None:
    me, headers = _register_and_login(client, "errs@example.com")

    r = client.post("/discover/like", json={"target_id": me}, headers=headers)
    assert r.status_code == 400
    assert r.json()["code"] == "invalid_target"

    r = client.post("/discover/like", json={"target_id": "nobody"}, headers=headers)
    assert r.status_code == 404
    assert r.json() == {"detail": "Invalid profile", "code": "not_found"}


def test_saving_default_preferences_does_not_narrow_the_feed(client) -> None:
    _, headers = _register_and_login(client, "roundtrip@example.com")
    today = date.today()
    _seed(
        User(id="teen", birthdate=date(today.year - 19, 1, 1)),
        User(id="elder", birthdate=date(today.year - 60, 1, 1)),
    )

    me = client.get("/users/me", headers=headers).json()
    r = client.put("/users/me", json={"preferences": me["preferences"]}, headers=headers)
    assert r.status_code == 200

    r = client.get("/discover/candidates", headers=headers)
    assert {c["id"] for c in r.json()} == {"teen", "elder"}


def test_like_store_failure_returns_retryable_error(client, monkeypatch) -> None:
    _, headers = _register_and_login(client, "flaky@example.com")
    _seed(User(id="s1"))

    def broken_insert(*_args, **_kwargs):
        raise PersistenceError("Failed to create like")

    monkeypatch.setattr(store, "insert_like", broken_insert)

    r = client.post("/discover/like", json={"target_id": "s1"}, headers=headers)
    assert r.status_code == 503
    assert r.json() == {"detail": "Failed to create like", "code": "persistence_error"}


def test_match_row_failure_still_reports_match(client, monkeypatch) -> None:
    a_id, a_headers = _register_and_login(client, "ma@example.com")
    b_id, b_headers = _register_and_login(client, "mb@example.com")
    assert client.post("/discover/like", json={"target_id": b_id}, headers=a_headers).status_code == 200

    def broken_insert(*_args, **_kwargs):
        raise PersistenceError("Failed to create match")

    monkeypatch.setattr(store, "insert_match", broken_insert)

    r = client.post("/discover/like", json={"target_id": a_id}, headers=b_headers)
    assert r.status_code == 200
    assert r.json()["is_match"] is True
    assert r.json()["matched_user"]["id"] == a_id
    with SessionLocal() as db:
        assert db.query(Match).count() == 0
