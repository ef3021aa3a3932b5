from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path


def _bootstrap_import_path() -> None:
    # Allow running as: python scripts/reconcile_matches.py
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


_bootstrap_import_path()

from swipematch.database import SessionLocal  # noqa: E402
from swipematch.services.match_service import reconcile_matches  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Create match rows for every mutual like pair that has none."
    )
    parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s %(name)s: %(message)s")

    with SessionLocal() as db:
        created = reconcile_matches(db)

    print(f"created {created} match row(s)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
