"""Seed the configured store with a first admin and one registration code."""

from __future__ import annotations

import importlib
import os
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.attendly.attendly.core.enums import Role
from src.attendly.attendly.employees.model import NewEmployee
from src.attendly.attendly.main import container_from_settings


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = container_from_settings(settings)

    admin = container.employee_service.seed_admin(
        NewEmployee(
            name=os.getenv("SEED_ADMIN_NAME", "Emma Williams"),
            email=os.getenv("SEED_ADMIN_EMAIL", "admin@attendly.local"),
            password=os.getenv("SEED_ADMIN_PASSWORD", "admin123"),
            department="HR",
            designation="HR Manager",
        )
    )
    code = container.registration_service.generate(current_role=Role.ADMIN, creator_id=admin.employee_id)

    print(f"OK: Admin {admin.email} ({admin.employee_code}) ready; registration code {code.code} valid until {code.expiry_date:%Y-%m-%d}")


if __name__ == "__main__":
    main()
