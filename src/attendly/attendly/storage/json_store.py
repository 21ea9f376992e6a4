from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from ..core.exceptions import StorageError
from .memory_store import InMemoryRecordStore

logger = logging.getLogger(__name__)


class JsonFileRecordStore(InMemoryRecordStore):
    """Record store persisted as one JSON document.

    Layout: ``{"mockAttendanceData": [...], "mockLeaveRequests": [...], ...}``,
    one array per record kind. A missing file is an empty store; an unreadable
    file raises ``StorageError`` instead of being treated as empty.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)
        super().__init__(self._read())

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, list[dict]]:
        if not self._path.exists():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, json.JSONDecodeError) as exc:
            logger.error("Cannot read record store %s: %s", self._path, exc)
            raise StorageError(f"Cannot read data file {self._path}") from exc

        if not isinstance(data, dict):
            raise StorageError(f"Data file {self._path} must contain a JSON object")
        return data

    def _flush(self) -> None:
        data = self.dump()
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=".attendly-", suffix=".json", dir=str(self._path.parent))
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(data, fh, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self._path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as exc:
            logger.error("Cannot write record store %s: %s", self._path, exc)
            raise StorageError(f"Cannot write data file {self._path}") from exc
