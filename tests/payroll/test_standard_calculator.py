from datetime import date, datetime

from src.attendly.attendly.core.enums import RequestStatus
from src.attendly.attendly.overtime.model import OvertimeRecord
from src.attendly.attendly.payroll.calculator.standard_calculator import StandardPayrollCalculator


def _overtime(hours, rate):
    return OvertimeRecord(
        overtime_id=1,
        employee_id=1,
        work_date=date(2025, 1, 10),
        hours=hours,
        rate=rate,
        reason="Release",
        status=RequestStatus.APPROVED,
        created_at=datetime(2025, 1, 10, 18, 0),
    )


def test_base_salary_from_table_with_default():
    calc = StandardPayrollCalculator()

    assert calc.base_salary(4) == 6500.0
    assert calc.base_salary(99) == 5000.0
    assert calc.hourly_rate(1) == 5000.0 / 160


def test_breakdown_components():
    calc = StandardPayrollCalculator()

    breakdown = calc.calculate(employee_id=1, month=1, year=2025, approved_overtime=[_overtime(2, 1.5)])

    expected_bonus = 250.0 if calc.bonus_granted(employee_id=1, month=1, year=2025) else 0.0
    assert breakdown.base_salary == 5000.0
    assert breakdown.overtime_pay == 93.75
    assert breakdown.deductions == 1000.0
    assert breakdown.bonus == expected_bonus
    assert breakdown.net_salary == round(5000.0 + 93.75 + expected_bonus - 1000.0, 2)


def test_bonus_draw_is_stable_per_period():
    calc = StandardPayrollCalculator()

    first = [calc.bonus_granted(employee_id=3, month=m, year=2025) for m in range(1, 13)]
    second = [calc.bonus_granted(employee_id=3, month=m, year=2025) for m in range(1, 13)]

    assert first == second


def test_bonus_probability_bounds():
    never = StandardPayrollCalculator(bonus_probability=0.0)
    always = StandardPayrollCalculator(bonus_probability=1.0)

    assert never.calculate(employee_id=2, month=5, year=2025, approved_overtime=[]).bonus == 0.0
    assert always.calculate(employee_id=2, month=5, year=2025, approved_overtime=[]).bonus == 275.0
