from __future__ import annotations

from swipematch.database import SessionLocal
from swipematch.models.user import User


def _register_and_login(client, email: str, password: str = "SecretPass123", **profile) -> tuple[str, dict[str, str]]:
    r = client.post("/auth/register", json={"email": email, "password": password, **profile})
    assert r.status_code == 201
    user_id = r.json()["id"]
    r = client.post("/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200
    return user_id, {"Authorization": f"Bearer {r.json()['access_token']}"}


def test_current_profile_fills_defaults(client) -> None:
    _, headers = _register_and_login(client, "fresh@example.com")

    r = client.get("/users/me", headers=headers)
    assert r.status_code == 200
    body = r.json()
    assert body["photos"] == []
    assert body["interests"] == []
    assert body["prompts"] == []
    assert body["lifestyle"]["drinking"] == "Socially"
    assert body["preferences"]["age_range"] is None
    assert body["preferences"]["gender_preference"] == []


def test_partial_update_only_touches_sent_fields(client) -> None:
    user_id, headers = _register_and_login(client, "edit@example.com", full_name="Before")

    payload = {
        "bio": "Weekend climber.",
        "height": 178,
        "interests": ["climbing", "coffee"],
        "prompts": [{"question": "Perfect Sunday?", "answer": "Crag then brunch"}],
        "lifestyle": {"smoking": "Never", "drinking": "Rarely"},
        "preferences": {"gender_preference": ["female", "other"], "distance": 30},
    }
    r = client.put("/users/me", json=payload, headers=headers)
    assert r.status_code == 200
    body = r.json()
    assert body["full_name"] == "Before"
    assert body["bio"] == "Weekend climber."
    assert body["height"] == 178
    assert body["interests"] == ["climbing", "coffee"]
    assert body["prompts"][0]["answer"] == "Crag then brunch"
    assert body["preferences"]["gender_preference"] == ["female", "other"]

    with SessionLocal() as db:
        row = db.query(User).filter(User.id == user_id).one()
        assert row.preferences == {"gender_preference": ["female", "other"], "distance": 30}
        assert row.lifestyle == {"smoking": "Never", "drinking": "Rarely"}


def test_update_rejects_taken_username(client) -> None:
    _, first = _register_and_login(client, "one@example.com", username="sunny")
    _, second = _register_and_login(client, "two@example.com")

    r = client.put("/users/me", json={"username": "sunny"}, headers=second)
    assert r.status_code == 409
    assert r.json()["code"] == "conflict"

    r = client.put("/users/me", json={"username": "sunny"}, headers=first)
    assert r.status_code == 200


def test_update_validates_preferences(client) -> None:
    _, headers = _register_and_login(client, "bad@example.com")
    r = client.put("/users/me", json={"preferences": {"age_range": {"min": 40, "max": 30}}}, headers=headers)
    assert r.status_code == 422
    r = client.put("/users/me", json={"preferences": {"gender_preference": ["robot"]}}, headers=headers)
    assert r.status_code == 422


def test_public_profile_lookup(client) -> None:
    other_id, _ = _register_and_login(client, "public@example.com", full_name="Pat")
    _, headers = _register_and_login(client, "viewer@example.com")

    r = client.get(f"/users/{other_id}", headers=headers)
    assert r.status_code == 200
    assert r.json()["full_name"] == "Pat"
    assert "email" not in r.json()

    r = client.get("/users/missing", headers=headers)
    assert r.status_code == 404
    assert r.json()["code"] == "not_found"
