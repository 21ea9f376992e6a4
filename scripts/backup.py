"""Backup the record store.

Note: Writes every collection of the configured store (memory, json or
mysql) into one JSON snapshot under ``backups/``. The snapshot uses the
JSON store layout, so it can be loaded back with STORE_BACKEND=json.
"""

from __future__ import annotations

import importlib
import json
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.attendly.attendly.main import container_from_settings
from src.attendly.attendly.storage.record_store import RecordKind


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    store = container_from_settings(settings).store

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"attendly_{ts}.json"

    snapshot = {kind.storage_key: list(store.get_all(kind)) for kind in RecordKind}
    out_file.write_text(json.dumps(snapshot, ensure_ascii=False, indent=2), encoding="utf-8")
    total = sum(len(rows) for rows in snapshot.values())
    print(f"OK: Backup created: {out_file} ({total} records)")


if __name__ == "__main__":
    main()
