from __future__ import annotations

from flask import Flask

from ..common.web import current_employee_id, current_role, json_body, login_required, ok
from ..container import Container
from .model import NewEmployee
from .service import PROFILE_FIELDS


def register(app: Flask, container: Container) -> None:
    @app.route("/api/register", methods=["POST"], endpoint="register_employee")
    def register_employee():
        data = json_body()
        employee = container.employee_service.register(
            NewEmployee(
                name=str(data.get("name") or ""),
                email=str(data.get("email") or ""),
                password=str(data.get("password") or ""),
                department=str(data.get("department") or ""),
                designation=str(data.get("designation") or ""),
                avatar_url=data.get("avatar_url"),
            ),
            str(data.get("registration_code") or ""),
        )
        return ok(employee, message="Registration successful", status=201)

    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    @login_required
    def list_employees():
        return ok(container.employee_service.list_all())

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="get_employee")
    @login_required
    def get_employee(employee_id: int):
        return ok(container.employee_service.get(employee_id))

    @app.route("/api/employees/<int:employee_id>", methods=["PATCH"], endpoint="update_employee")
    @login_required
    def update_employee(employee_id: int):
        data = json_body()
        fields = {k: v for k, v in data.items() if k in PROFILE_FIELDS or k in {"email", "employee_code", "role"}}
        employee = container.employee_service.update_profile(
            current_employee_id=current_employee_id(),
            current_role=current_role(),
            employee_id=employee_id,
            **fields,
        )
        return ok(employee, message="Profile updated")

    @app.route("/api/employees/<int:employee_id>/status", methods=["PUT"], endpoint="update_employee_status")
    @login_required
    def update_employee_status(employee_id: int):
        data = json_body()
        employee = container.employee_service.update_status(
            current_employee_id=current_employee_id(),
            current_role=current_role(),
            employee_id=employee_id,
            status=str(data.get("status") or ""),
        )
        return ok(employee, message="Status updated")

    @app.route("/api/employees/<int:employee_id>/role", methods=["PUT"], endpoint="change_employee_role")
    @login_required
    def change_employee_role(employee_id: int):
        data = json_body()
        employee = container.employee_service.change_role(
            current_role=current_role(),
            employee_id=employee_id,
            role=str(data.get("role") or ""),
        )
        return ok(employee, message="Role updated")
