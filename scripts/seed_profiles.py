from __future__ import annotations

import argparse
import random
import sys
from datetime import date, timedelta
from pathlib import Path


def _bootstrap_import_path() -> None:
    # Allow running as: python scripts/seed_profiles.py
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


_bootstrap_import_path()

from swipematch.config import build_sqlalchemy_db_url, settings  # noqa: E402
from swipematch.database import Base, SessionLocal, engine  # noqa: E402
from swipematch.db import store  # noqa: E402
from swipematch.models.user import User  # noqa: E402
from swipematch.utils.password_hash import hash_password  # noqa: E402


FIRST_NAMES = ["Alex", "Sam", "Jordan", "Taylor", "Riley", "Casey", "Morgan", "Jamie", "Avery", "Quinn"]
GENDERS = ["male", "female", "other"]
INTERESTS = ["hiking", "coffee", "films", "cooking", "travel", "music", "climbing", "books", "yoga", "gaming"]


def _demo_user(i: int, rng: random.Random, password_hash: str) -> User:
    name = f"{rng.choice(FIRST_NAMES)} {chr(65 + i % 26)}."
    age_days = rng.randint(21 * 365, 45 * 365)
    return User(
        email=f"demo{i}@example.com",
        password=password_hash,
        full_name=name,
        username=f"demo{i}",
        gender=rng.choice(GENDERS),
        birthdate=date.today() - timedelta(days=age_days),
        bio=f"Demo profile #{i}",
        interests=rng.sample(INTERESTS, 3),
        preferences={"gender_preference": [], "dealbreakers": []},
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create demo accounts demo<N>@example.com for local testing.")
    parser.add_argument("--count", type=int, default=20, help="Number of demo accounts")
    parser.add_argument("--password", default="DemoPass123", help="Password for every demo account")
    parser.add_argument("--seed", type=int, default=7, help="Random seed")
    args = parser.parse_args(argv)

    if build_sqlalchemy_db_url(settings).startswith("sqlite"):
        Base.metadata.create_all(bind=engine)

    rng = random.Random(args.seed)
    password_hash = hash_password(args.password)
    created = 0
    with SessionLocal() as db:
        for i in range(args.count):
            user = _demo_user(i, rng, password_hash)
            if store.get_user_by_email(db, user.email) is not None:
                continue
            store.insert_user(db, user)
            created += 1

    print(f"created {created} demo account(s); password={args.password}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
