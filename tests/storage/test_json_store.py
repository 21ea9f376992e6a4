import json

import pytest

from src.attendly.attendly.core.exceptions import StorageError
from src.attendly.attendly.storage.json_store import JsonFileRecordStore
from src.attendly.attendly.storage.record_store import RecordKind


def test_missing_file_is_an_empty_store(tmp_path):
    store = JsonFileRecordStore(tmp_path / "data.json")

    assert store.get_all(RecordKind.ATTENDANCE) == []
    assert not (tmp_path / "data.json").exists()


def test_writes_are_persisted_under_storage_keys(tmp_path):
    path = tmp_path / "data.json"
    store = JsonFileRecordStore(path)
    store.append(RecordKind.ATTENDANCE, {"employeeId": 1, "date": "2025-01-06"})

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["mockAttendanceData"][0]["employeeId"] == 1

    reopened = JsonFileRecordStore(path)
    assert reopened.get_by_id(RecordKind.ATTENDANCE, 1)["date"] == "2025-01-06"
    assert reopened.append(RecordKind.ATTENDANCE, {"employeeId": 2})["id"] == 2


def test_transaction_flushes_once_and_not_on_error(tmp_path):
    path = tmp_path / "data.json"
    store = JsonFileRecordStore(path)
    store.append(RecordKind.LEAVE, {"reason": "kept"})

    with pytest.raises(ValueError):
        with store.transaction():
            store.append(RecordKind.LEAVE, {"reason": "dropped"})
            raise ValueError("abort")

    data = json.loads(path.read_text(encoding="utf-8"))
    assert [r["reason"] for r in data["mockLeaveRequests"]] == ["kept"]


def test_corrupt_file_raises_storage_error(tmp_path):
    path = tmp_path / "data.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(StorageError):
        JsonFileRecordStore(path)


def test_non_object_document_raises_storage_error(tmp_path):
    path = tmp_path / "data.json"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(StorageError):
        JsonFileRecordStore(path)
