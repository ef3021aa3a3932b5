from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path


def _bootstrap_import_path() -> None:
    # Allow running as: python scripts/import_users.py
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


_bootstrap_import_path()

from swipematch.config import build_sqlalchemy_db_url, settings  # noqa: E402
from swipematch.database import Base, SessionLocal, engine  # noqa: E402
from swipematch.services.profile_service import import_accounts  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description=(
            "Create login accounts from a JSON array of user records. "
            "Each record needs email and password; other keys are profile fields."
        )
    )
    parser.add_argument("path", type=Path, help="JSON file with a list of user records")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s %(name)s: %(message)s")

    records = json.loads(args.path.read_text(encoding="utf-8"))
    if not isinstance(records, list):
        sys.stderr.write("ERROR: expected a JSON array of user records\n")
        return 2

    if build_sqlalchemy_db_url(settings).startswith("sqlite"):
        Base.metadata.create_all(bind=engine)

    with SessionLocal() as db:
        created, skipped, failed = import_accounts(db, records)

    print(f"created={created} skipped={skipped} failed={failed}")
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
