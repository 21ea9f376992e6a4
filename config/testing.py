SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

STORE_BACKEND = "memory"
DATA_FILE = None

DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "attendly_test",
}

AUTO_INIT_DB = False

ATTENDANCE_CYCLE_POLICY = "strict"
REGISTRATION_CODE_DEFAULT_DAYS = 7
