"""Dump the Talent Hub database with `mysqldump`.

Note: requires the MySQL client tools on PATH; otherwise back up with
MySQL Workbench or any other client.
"""

from __future__ import annotations

import importlib
import subprocess
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

TABLES = (
    "departments",
    "career_tracks",
    "job_positions",
    "track_positions",
    "teams",
    "auth_identities",
    "users",
    "team_members",
    "evaluation_cycles",
    "evaluations",
    "evaluation_competencies",
    "action_plans",
    "action_plan_items",
)


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db = settings.DB_CONFIG

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)
    out_file = out_dir / f"{db['database']}_{datetime.now():%Y%m%d_%H%M%S}.sql"

    cmd = [
        "mysqldump",
        f"-h{db['host']}",
        f"-P{db.get('port', 3306)}",
        f"-u{db['user']}",
        f"-p{db['password']}",
        db["database"],
        *TABLES,
    ]

    try:
        with out_file.open("wb") as f:
            subprocess.run(cmd, stdout=f, stderr=subprocess.PIPE, check=True)
    except FileNotFoundError:
        out_file.unlink(missing_ok=True)
        raise SystemExit("`mysqldump` not found. Install the MySQL client tools or back up with Workbench.")
    print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main()
