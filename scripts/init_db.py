"""Create the attendance database and apply database/schema.sql.

Run with --seed to load the demo teachers, classrooms and schedules as well.
"""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.rfid_attendance.rfid_attendance.database.bootstrap import apply_schema, apply_seed_sql, list_tables
from src.rfid_attendance.rfid_attendance.database.connection import DBConfig

DATABASE_DIR = REPO_ROOT / "database"


def load_db_config() -> dict:
    settings = importlib.import_module(get_settings_module())
    backend = getattr(settings, "STORAGE_BACKEND", "mysql")
    if backend != "mysql":
        raise SystemExit(f"{settings.__name__} uses the {backend!r} backend, there is no database to set up")
    return dict(settings.DB_CONFIG)


def describe(db_config: dict) -> str:
    target = DBConfig.from_mapping(db_config)
    return f"{target.user}@{target.host}:{target.port}/{target.database}"


def seed(db_config: dict) -> None:
    apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
    print(f"OK: demo teachers/classrooms/schedules loaded -> {describe(db_config)}")


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Create the attendance schema.")
    parser.add_argument("--seed", action="store_true", help="also load database/seed.sql")
    args = parser.parse_args(argv)

    db_config = load_db_config()
    apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
    print(f"OK: schema applied -> {describe(db_config)} (tables={', '.join(list_tables(db_config))})")

    if args.seed:
        seed(db_config)


if __name__ == "__main__":
    main()
