"""Daily absence sweep, meant to be run from cron once per day.

    APP_ENV=production python scripts/run_absence_sweep.py [--date YYYY-MM-DD]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src" / "batch_attendance"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from batch_attendance.common.datetime_utils import parse_iso_date
from batch_attendance.core.constants import DAY_KEY_FORMAT
from batch_attendance.main import create_app


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run the absence sweep for one day.")
    parser.add_argument("--date", help="local day to sweep (YYYY-MM-DD), defaults to today")
    args = parser.parse_args(argv)

    day = parse_iso_date(args.date).strftime(DAY_KEY_FORMAT) if args.date else None

    app = create_app()
    container = app.extensions["batch_attendance"]
    summary = container.sweep.run(day)

    print(
        f"OK: sweep {summary.day} checked={summary.checked} warnings={summary.warnings_sent} "
        f"blocks={summary.blocks_applied} hours={summary.hours_finalized} "
        f"already_swept={summary.already_swept} failures={summary.notification_failures}"
    )
    for err in summary.errors:
        print(f"  ! {err}")
    return 1 if summary.errors else 0


if __name__ == "__main__":
    raise SystemExit(main())
