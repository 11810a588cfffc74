"""Register the first admin so the bot has someone to notify.

Usage: python scripts/seed_db.py <line_user_id> <display_name>
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.attendance_bot.attendance_bot.database.connection import DBConfig, DatabaseConnection
from src.attendance_bot.attendance_bot.staff.repository import StaffRepository
from src.attendance_bot.attendance_bot.store.mysql_tabular_store import MySQLTabularStore


def main(argv: list[str]) -> int:
    if len(argv) != 2:
        print(__doc__.strip())
        return 2
    user_id, display_name = argv

    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    staff = StaffRepository(MySQLTabularStore(conn))

    existing = staff.get_by_user_id(user_id)
    if existing:
        print(f"SKIP: {existing.display_name} is already registered (admin={existing.is_admin})")
        return 0

    staff.create(user_id=user_id, display_name=display_name, is_admin=True)
    print(
        f"OK: Seeded admin {display_name} -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
