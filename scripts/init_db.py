from __future__ import annotations

import sys
from pathlib import Path

import importlib

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.attendly.attendly.database.bootstrap import apply_schema, list_tables
from src.attendly.attendly.database.connection import DatabaseConnection, DBConfig


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    conn_factory = DatabaseConnection(DBConfig.from_dict(dict(settings.DB_CONFIG)))

    apply_schema(conn_factory)
    tables = list_tables(conn_factory)
    print(f"OK: Applied schema.sql -> {conn_factory.config.describe()} (tables={len(tables)})")


if __name__ == "__main__":
    main()
