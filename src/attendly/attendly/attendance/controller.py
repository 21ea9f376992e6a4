from __future__ import annotations

from flask import Flask, request

from ..common.web import current_employee_id, current_role, datetime_arg, int_arg, json_body, login_required, ok
from ..container import Container
from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_LIST_LIMIT


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="checkin")
    @login_required
    def checkin():
        record = service.check_in(current_employee_id())
        return ok(service.to_ui(record), message="Checked in successfully", status=201)

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="checkout")
    @login_required
    def checkout():
        record = service.check_out(current_employee_id())
        return ok(service.to_ui(record), message="Checked out successfully")

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def attendance_today():
        employee_id = current_employee_id()
        record = service.get_today_record(employee_id)
        return ok(
            {
                "state": service.status_for_today(employee_id).value,
                "record": service.to_ui(record) if record else None,
            }
        )

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_history")
    @login_required
    def attendance_history():
        if request.args.get("all"):
            records = service.list_all(current_role=current_role(), limit=DEFAULT_LIST_LIMIT)
            return ok([service.to_ui(r) for r in records])
        return ok(service.get_history_ui(current_employee_id(), limit=DEFAULT_HISTORY_LIMIT))

    @app.route("/api/attendance/override", methods=["POST"], endpoint="attendance_override")
    @login_required
    def attendance_override():
        data = json_body()
        record = service.admin_override(
            current_role=current_role(),
            admin_id=current_employee_id(),
            employee_id=int_arg(data, "employee_id"),
            field=str(data.get("field") or ""),
            timestamp=datetime_arg(data, "timestamp"),
        )
        return ok(service.to_ui(record), message="Attendance updated")
