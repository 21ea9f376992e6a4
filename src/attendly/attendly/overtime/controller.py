from __future__ import annotations

from flask import Flask, request

from ..common.web import current_employee_id, current_role, date_arg, json_body, login_required, ok
from ..container import Container
from ..core.enums import REVIEWER_ROLES


def register(app: Flask, container: Container) -> None:
    service = container.overtime_service

    @app.route("/api/overtime", methods=["POST"], endpoint="submit_overtime")
    @login_required
    def submit_overtime():
        data = json_body()
        record = service.submit_overtime(
            employee_id=current_employee_id(),
            work_date=date_arg(data, "date"),
            hours=data.get("hours"),
            rate=data.get("rate", 1.5),
            reason=str(data.get("reason") or ""),
        )
        return ok(record, message="Overtime request submitted", status=201)

    @app.route("/api/overtime", methods=["GET"], endpoint="list_overtime")
    @login_required
    def list_overtime():
        role = current_role()
        if role in REVIEWER_ROLES:
            return ok(service.list_all(current_role=role, status=request.args.get("status") or None))
        return ok(service.list_for_employee(current_employee_id()))

    @app.route("/api/overtime/<int:overtime_id>/decision", methods=["POST"], endpoint="decide_overtime")
    @login_required
    def decide_overtime(overtime_id: int):
        data = json_body()
        record = service.decide_overtime(
            current_role=current_role(),
            approver_id=current_employee_id(),
            overtime_id=overtime_id,
            status=str(data.get("status") or ""),
        )
        return ok(record, message=f"Overtime {record.status.value}")
