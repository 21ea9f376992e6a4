"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the rules live in the services.
"""

from datetime import datetime

from src.attendly.attendly.container import build_container
from src.attendly.attendly.core.enums import Role
from src.attendly.attendly.employees.model import NewEmployee
from src.attendly.attendly.storage.memory_store import InMemoryRecordStore


def main():
    container = build_container(store=InMemoryRecordStore())
    admin = container.employee_service.seed_admin(
        NewEmployee(name="Admin", email="admin@example.com", password="secret1", department="HR", designation="")
    )
    code = container.registration_service.generate(current_role=Role.ADMIN, creator_id=admin.employee_id)
    alex = container.employee_service.register(
        NewEmployee(
            name="Alex Johnson",
            email="alex@example.com",
            password="secret1",
            department="Engineering",
            designation="Developer",
        ),
        code.code,
    )

    container.attendance_service.check_in(alex.employee_id, now=datetime(2025, 1, 6, 9, 0))
    container.attendance_service.check_out(alex.employee_id, now=datetime(2025, 1, 6, 17, 30))
    print(container.attendance_service.get_history_ui(alex.employee_id, limit=5))


if __name__ == "__main__":
    main()
