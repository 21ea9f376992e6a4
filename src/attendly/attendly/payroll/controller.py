from __future__ import annotations

from flask import Flask

from ..common.web import current_employee_id, current_role, int_arg, json_body, login_required, ok
from ..container import Container
from ..core.enums import PAYROLL_ROLES


def register(app: Flask, container: Container) -> None:
    service = container.payroll_service

    @app.route("/api/payroll/process", methods=["POST"], endpoint="process_payroll")
    @login_required
    def process_payroll():
        data = json_body()
        record = service.process_payroll(
            current_role=current_role(),
            employee_id=int_arg(data, "employee_id"),
            month=data.get("month"),
            year=data.get("year"),
        )
        return ok(record, message="Payroll processed")

    @app.route("/api/payroll/<int:payroll_id>/paid", methods=["POST"], endpoint="mark_payroll_paid")
    @login_required
    def mark_payroll_paid(payroll_id: int):
        record = service.mark_paid(current_role=current_role(), payroll_id=payroll_id)
        return ok(record, message="Payroll marked as paid")

    @app.route("/api/payroll", methods=["GET"], endpoint="list_payroll")
    @login_required
    def list_payroll():
        role = current_role()
        if role in PAYROLL_ROLES:
            return ok(service.list_all(current_role=role))
        return ok(service.list_for_employee(current_employee_id()))
