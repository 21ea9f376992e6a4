"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_HISTORY_LIMIT = 30
DEFAULT_LIST_LIMIT = 200

DEFAULT_REGISTRATION_CODE_DAYS = 7
REGISTRATION_CODE_BYTES = 3

EMPLOYEE_CODE_PREFIX = "EMP-"

# Payroll
DEFAULT_BASE_SALARY = 5000.0
STANDARD_MONTHLY_HOURS = 160
BONUS_PROBABILITY = 0.3
BONUS_RATE = 0.05
DEDUCTION_RATE = 0.2

# Fixed monthly base salary per employee id (demo data).
BASE_SALARY_TABLE = {
    1: 5000.0,
    2: 5500.0,
    3: 4800.0,
    4: 6500.0,
    5: 5200.0,
}
