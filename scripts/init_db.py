"""Create the staff portal tables in the configured MySQL database.

Usage: APP_ENV=development python scripts/init_db.py
Exits non-zero when a required table is still missing afterwards.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.staff_portal.staff_portal.database.bootstrap import apply_schema, list_tables, missing_tables


def _target(db_config: dict) -> str:
    return f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"


def main() -> int:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")

    tables = list_tables(db_config)
    missing = missing_tables(tables)
    if missing:
        print(f"FAIL: {_target(db_config)} is missing tables: {', '.join(missing)}")
        return 1

    print(f"OK: Applied schema.sql -> {_target(db_config)}")
    for name in sorted(tables):
        print(f"  - {name}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
