from __future__ import annotations

from flask import Flask

from ..common.web import current_employee_id, current_role, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.registration_service

    @app.route("/api/registration-codes", methods=["POST"], endpoint="generate_registration_code")
    @login_required
    def generate_registration_code():
        data = json_body()
        code = service.generate(
            current_role=current_role(),
            creator_id=current_employee_id(),
            expiry_days=data.get("expiry_days"),
        )
        return ok(code, message="Registration code generated", status=201)

    @app.route("/api/registration-codes", methods=["GET"], endpoint="list_registration_codes")
    @login_required
    def list_registration_codes():
        return ok(service.list_codes(current_role=current_role()))

    @app.route("/api/registration-codes/<code>", methods=["GET"], endpoint="validate_registration_code")
    def validate_registration_code(code: str):
        return ok({"code": code.strip().upper(), "valid": service.is_valid(code)})
