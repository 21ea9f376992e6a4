import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# memory | json | mysql
STORE_BACKEND = os.getenv("STORE_BACKEND", "json")
DATA_FILE = os.getenv("DATA_FILE", "instance/attendly.json")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendly_db"),
}

# If enabled (mysql store only), schema.sql is applied on startup (idempotent).
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

# strict: one check-in/check-out cycle per day; multiple: several cycles allowed
ATTENDANCE_CYCLE_POLICY = os.getenv("ATTENDANCE_CYCLE_POLICY", "strict")
REGISTRATION_CODE_DEFAULT_DAYS = int(os.getenv("REGISTRATION_CODE_DEFAULT_DAYS", "7"))

DEFAULT_BASE_SALARY = float(os.getenv("DEFAULT_BASE_SALARY", "5000"))
STANDARD_MONTHLY_HOURS = int(os.getenv("STANDARD_MONTHLY_HOURS", "160"))
