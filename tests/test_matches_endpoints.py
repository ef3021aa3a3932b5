from __future__ import annotations

from swipematch.database import SessionLocal
from swipematch.models.match import Match, make_pair_key
from swipematch.models.user import User


def _register_and_login(client, email: str, password: str = "SecretPass123", **profile) -> tuple[str, dict[str, str]]:
    r = client.post("/auth/register", json={"email": email, "password": password, **profile})
    assert r.status_code == 201
    user_id = r.json()["id"]
    r = client.post("/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200
    return user_id, {"Authorization": f"Bearer {r.json()['access_token']}"}


def test_matches_list_both_sides_after_mutual_like(client) -> None:
    a_id, a_headers = _register_and_login(client, "a@example.com", full_name="Ada")
    b_id, b_headers = _register_and_login(client, "b@example.com", full_name="Bo")
    _, c_headers = _register_and_login(client, "c@example.com")

    client.post("/discover/like", json={"target_id": b_id}, headers=a_headers)
    assert client.get("/matches", headers=a_headers).json() == []

    client.post("/discover/like", json={"target_id": a_id}, headers=b_headers)

    a_matches = client.get("/matches", headers=a_headers).json()
    b_matches = client.get("/matches", headers=b_headers).json()
    assert [m["id"] for m in a_matches] == [b_id]
    assert [m["id"] for m in b_matches] == [a_id]
    assert a_matches[0]["full_name"] == "Bo"
    assert a_matches[0]["matched_at"] is not None

    assert client.get("/matches", headers=c_headers).json() == []


def test_inactive_and_orphaned_matches_are_hidden(client) -> None:
    a_id, a_headers = _register_and_login(client, "solo@example.com")
    with SessionLocal() as db:
        db.add(User(id="ex"))
        db.add(User(id="keep", full_name="Keeper"))
        db.add(Match(user1_id=a_id, user2_id="ex", pair_key=make_pair_key(a_id, "ex"), is_active=False))
        db.add(Match(user1_id="keep", user2_id=a_id, pair_key=make_pair_key("keep", a_id), is_active=True))
        db.add(Match(user1_id=a_id, user2_id="gone", pair_key=make_pair_key(a_id, "gone"), is_active=True))
        db.commit()

    r = client.get("/matches", headers=a_headers)
    assert r.status_code == 200
    assert [m["id"] for m in r.json()] == ["keep"]


def test_pair_key_is_order_independent() -> None:
    assert make_pair_key("b", "a") == make_pair_key("a", "b") == "a:b"
