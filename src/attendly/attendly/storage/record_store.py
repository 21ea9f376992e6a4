from __future__ import annotations

from enum import Enum
from typing import ContextManager, Optional, Protocol, Sequence


class RecordKind(str, Enum):
    EMPLOYEES = "employees"
    ATTENDANCE = "attendance"
    LEAVE = "leave"
    OVERTIME = "overtime"
    PAYROLL = "payroll"
    REGISTRATION_CODES = "registration_codes"

    @property
    def storage_key(self) -> str:
        """Key of the collection inside a key/value backing store."""
        return _STORAGE_KEYS[self]


_STORAGE_KEYS = {
    RecordKind.EMPLOYEES: "users",
    RecordKind.ATTENDANCE: "mockAttendanceData",
    RecordKind.LEAVE: "mockLeaveRequests",
    RecordKind.OVERTIME: "mockOvertimeData",
    RecordKind.PAYROLL: "mockPayrollData",
    RecordKind.REGISTRATION_CODES: "registrationCodes",
}

ID_FIELD = "id"
VERSION_FIELD = "version"


class RecordStore(Protocol):
    """Persistence of plain-dict records, one collection per kind.

    Every stored record carries an integer ``id`` (assigned on append,
    sequential per kind) and a ``version`` bumped on each update. Repositories
    translate between these dicts and the frozen domain dataclasses.
    """

    def get_all(self, kind: RecordKind) -> Sequence[dict]:
        """All records of ``kind`` in insertion order; empty if none yet."""

        raise NotImplementedError

    def get_by_id(self, kind: RecordKind, record_id: int) -> Optional[dict]:
        raise NotImplementedError

    def append(self, kind: RecordKind, record: dict) -> dict:
        raise NotImplementedError

    def update_by_id(
        self,
        kind: RecordKind,
        record_id: int,
        patch: dict,
        *,
        expected_version: Optional[int] = None,
    ) -> Optional[dict]:
        """Merge ``patch`` into the record; ``None`` if the id is unknown.

        Raises ``ConcurrentModificationError`` when ``expected_version`` is
        given and the stored version differs.
        """

        raise NotImplementedError

    def transaction(self) -> ContextManager[None]:
        """Group reads and writes so they are applied all together or not at all.

        Other writers wait until the transaction ends, so a check made on data
        read inside it still holds when the write happens.
        """

        raise NotImplementedError
