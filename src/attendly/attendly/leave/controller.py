from __future__ import annotations

from flask import Flask, request

from ..common.web import current_employee_id, current_role, date_arg, json_body, login_required, ok
from ..container import Container
from ..core.enums import REVIEWER_ROLES


def register(app: Flask, container: Container) -> None:
    service = container.leave_service

    @app.route("/api/leave", methods=["POST"], endpoint="submit_leave")
    @login_required
    def submit_leave():
        data = json_body()
        req = service.submit_leave(
            employee_id=current_employee_id(),
            start_date=date_arg(data, "start_date"),
            end_date=date_arg(data, "end_date"),
            reason=str(data.get("reason") or ""),
            leave_type=data.get("type") or "annual",
        )
        return ok(req, message="Leave request submitted", status=201)

    @app.route("/api/leave", methods=["GET"], endpoint="list_leave")
    @login_required
    def list_leave():
        role = current_role()
        if role in REVIEWER_ROLES:
            return ok(service.list_all(current_role=role, status=request.args.get("status") or None))
        return ok(service.list_for_employee(current_employee_id()))

    @app.route("/api/leave/<int:request_id>/decision", methods=["POST"], endpoint="decide_leave")
    @login_required
    def decide_leave(request_id: int):
        data = json_body()
        req = service.decide_leave(
            current_role=current_role(),
            decided_by=current_employee_id(),
            request_id=request_id,
            status=str(data.get("status") or ""),
        )
        return ok(req, message=f"Leave request {req.status.value}")
