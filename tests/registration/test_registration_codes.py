from datetime import datetime, timedelta

import pytest

from src.attendly.attendly.core.enums import Role
from src.attendly.attendly.core.exceptions import AuthorizationError, InvalidOrExpiredCode, ValidationError
from src.attendly.attendly.registration.repository import StoreRegistrationCodeRepository
from src.attendly.attendly.registration.service import RegistrationCodeService, random_code
from src.attendly.attendly.storage.memory_store import InMemoryRecordStore

NOW = datetime(2025, 1, 6, 8, 0)


def _service(codes=None):
    repo = StoreRegistrationCodeRepository(InMemoryRecordStore())
    factory = iter(codes).__next__ if codes else None
    return RegistrationCodeService(repo, code_factory=factory)


def test_random_code_is_six_uppercase_hex_chars():
    code = random_code()

    assert len(code) == 6
    assert code == code.upper()
    int(code, 16)


def test_default_expiry_is_seven_days():
    service = _service()
    code = service.generate(current_role=Role.ADMIN, creator_id=1, now=NOW)

    assert code.expiry_date == NOW + timedelta(days=7)
    assert service.is_valid(code.code, now=NOW)
    assert service.is_valid(code.code, now=NOW + timedelta(days=6, hours=23))
    assert not service.is_valid(code.code, now=NOW + timedelta(days=8))


def test_checking_does_not_consume():
    service = _service(["abc123"])
    service.generate(current_role=Role.ADMIN, creator_id=1, now=NOW)

    assert service.is_valid("ABC123", now=NOW)
    assert service.is_valid("abc123", now=NOW)

    service.consume("ABC123")
    assert not service.is_valid("ABC123", now=NOW)


def test_consume_is_idempotent_and_rejects_unknown_codes():
    service = _service(["C0FFEE"])
    service.generate(current_role=Role.ADMIN, creator_id=1, now=NOW)

    first = service.consume("C0FFEE")
    second = service.consume("C0FFEE")

    assert first.is_used and second.is_used
    assert first.code_id == second.code_id
    with pytest.raises(InvalidOrExpiredCode):
        service.consume("FFFFFF")


def test_generate_skips_codes_already_issued():
    service = _service(["AAAAAA", "AAAAAA", "BBBBBB"])
    service.generate(current_role=Role.ADMIN, creator_id=1, now=NOW)

    second = service.generate(current_role=Role.ADMIN, creator_id=1, now=NOW)

    assert second.code == "BBBBBB"
    assert [c.code for c in service.list_codes(current_role=Role.ADMIN)] == ["BBBBBB", "AAAAAA"]


@pytest.mark.parametrize("days", [0, -1, "soon"])
def test_generate_rejects_bad_expiry(days):
    with pytest.raises(ValidationError):
        _service().generate(current_role=Role.ADMIN, creator_id=1, expiry_days=days, now=NOW)


@pytest.mark.parametrize("role", [Role.EMPLOYEE, Role.HR, Role.MANAGER])
def test_only_admin_manages_codes(role):
    service = _service()

    with pytest.raises(AuthorizationError):
        service.generate(current_role=role, creator_id=1, now=NOW)
    with pytest.raises(AuthorizationError):
        service.list_codes(current_role=role)
