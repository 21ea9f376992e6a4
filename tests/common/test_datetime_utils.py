from datetime import datetime, timezone

import pytest

from src.attendly.attendly.common.datetime_utils import parse_iso_datetime, to_local_naive
from src.attendly.attendly.common.validators import require_positive
from src.attendly.attendly.core.exceptions import ValidationError


def test_naive_timestamp_is_kept_as_is():
    assert parse_iso_datetime("2025-01-06T09:00:00") == datetime(2025, 1, 6, 9, 0)


@pytest.mark.parametrize("value", ["2025-01-06T17:30:00Z", "2025-01-06T17:30:00+00:00", "2025-01-07T00:30:00+07:00"])
def test_offset_timestamps_become_naive_local_time(value):
    parsed = parse_iso_datetime(value)

    expected = datetime(2025, 1, 6, 17, 30, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
    assert parsed.tzinfo is None
    assert parsed == expected
    assert (parsed - datetime(2025, 1, 6, 9, 0)) == (expected - datetime(2025, 1, 6, 9, 0))


def test_to_local_naive_leaves_naive_values():
    value = datetime(2025, 1, 6, 9, 0)

    assert to_local_naive(value) is value


@pytest.mark.parametrize("value", ["nan", float("nan"), "inf", float("-inf"), "1e400"])
def test_require_positive_rejects_non_finite_numbers(value):
    with pytest.raises(ValidationError):
        require_positive(value, "Hours")


def test_require_positive_accepts_numeric_strings():
    assert require_positive("2.5", "Hours") == 2.5
