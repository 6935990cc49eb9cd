"""Load demo rows and (re)set the demo users' passwords.

Run after scripts/init_db.py. Safe to run repeatedly.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.staff_portal.staff_portal.database.bootstrap import (
    DEMO_USERS,
    apply_seed_sql,
    count_rows,
    ensure_demo_users,
)


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    ensure_demo_users(db_config)

    counts = count_rows(db_config)
    print(f"OK: Seeded {db_config.get('database')} ({', '.join(f'{t}={n}' for t, n in counts.items())})")
    print("Demo sign-ins:")
    for name, email, password, role in DEMO_USERS:
        print(f"  {role:<9} {email} / {password}  ({name})")


if __name__ == "__main__":
    main()
