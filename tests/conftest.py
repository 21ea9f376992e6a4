from __future__ import annotations

from datetime import datetime

import pytest

from src.attendly.attendly.container import build_container
from src.attendly.attendly.core.enums import Role
from src.attendly.attendly.employees.model import NewEmployee
from src.attendly.attendly.storage.memory_store import InMemoryRecordStore

NOW = datetime(2025, 1, 6, 8, 0, 0)


@pytest.fixture
def container():
    return build_container(store=InMemoryRecordStore())


@pytest.fixture
def admin(container):
    return container.employee_service.seed_admin(
        NewEmployee(
            name="Emma Williams",
            email="admin@example.com",
            password="admin123",
            department="HR",
            designation="HR Manager",
        ),
        now=NOW,
    )


@pytest.fixture
def employee(container, admin):
    code = container.registration_service.generate(current_role=Role.ADMIN, creator_id=admin.employee_id, now=NOW)
    return container.employee_service.register(
        NewEmployee(
            name="Alex Johnson",
            email="alex@example.com",
            password="secret1",
            department="Engineering",
            designation="Developer",
        ),
        code.code,
        now=NOW,
    )
