"""Run one daily bootstrap right now.

Usage: python scripts/run_bootstrap.py [YYYY-MM-DD]

Without a date, seeds today in the configured timezone. Safe to repeat:
rows that already exist are left untouched.
"""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.club_attendance.club_attendance.common.validators import require_iso_date
from src.club_attendance.club_attendance.core.exceptions import ValidationError
from src.club_attendance.club_attendance.main import create_container


def main(argv: list[str]) -> int:
    container = create_container()
    try:
        day = require_iso_date(argv[0], "date") if argv else container.clock.today()
    except ValidationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    result = container.bootstrap_service.execute(day)
    if result.aborted:
        print(f"ERROR: roster fetch failed: {result.roster_error}", file=sys.stderr)
        return 1

    for table, outcome in result.outcomes.items():
        if outcome is None:
            print(f"{table}: seeder crashed (see log)")
            continue
        print(
            f"{table}: inserted={len(outcome.inserted)} "
            f"existing={len(outcome.skipped)} failed={len(outcome.failed)}"
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
