from __future__ import annotations

import importlib
import logging
from types import ModuleType
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.web import register_error_handlers
from .container import Container, build_container, build_store
from .database.bootstrap import apply_schema
from .database.connection import DatabaseConnection, DBConfig
from .employees.controller import register as register_employees
from .leave.controller import register as register_leave
from .overtime.controller import register as register_overtime
from .payroll.controller import register as register_payroll
from .registration.controller import register as register_registration

logger = logging.getLogger(__name__)


def load_settings(settings_module: Optional[str] = None) -> ModuleType:
    return importlib.import_module(settings_module or get_settings_module())


def container_from_settings(settings: ModuleType) -> Container:
    backend = getattr(settings, "STORE_BACKEND", "memory")
    db_config = getattr(settings, "DB_CONFIG", {})

    if backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(DatabaseConnection(DBConfig.from_dict(db_config)))

    store = build_store(backend=backend, data_file=getattr(settings, "DATA_FILE", None), db_config=db_config)
    return build_container(
        store=store,
        cycle_policy=getattr(settings, "ATTENDANCE_CYCLE_POLICY", "strict"),
        registration_code_days=int(getattr(settings, "REGISTRATION_CODE_DEFAULT_DAYS", 7)),
        base_salary_table=getattr(settings, "BASE_SALARY_TABLE", None),
        default_base_salary=float(getattr(settings, "DEFAULT_BASE_SALARY", 5000.0)),
        monthly_hours=int(getattr(settings, "STANDARD_MONTHLY_HOURS", 160)),
    )


def create_app(settings_module: Optional[str] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    settings = load_settings(settings_module)

    logging.basicConfig(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    container = container or container_from_settings(settings)
    app.extensions["attendly"] = container
    logger.info("Attendly started (settings=%s, store=%s)", settings.__name__, type(container.store).__name__)

    register_error_handlers(app)
    register_employees(app, container)
    register_attendance(app, container)
    register_leave(app, container)
    register_overtime(app, container)
    register_payroll(app, container)
    register_registration(app, container)

    return app
