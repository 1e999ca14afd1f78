from __future__ import annotations

import json
import logging
import os
import threading
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator

_log = logging.getLogger(__name__)


def _atomic_tmp_path(path: Path) -> Path:
    return path.with_suffix(path.suffix + f".{uuid.uuid4().hex}.tmp")


def atomic_write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = _atomic_tmp_path(path)
    try:
        with tmp.open("w", encoding="utf-8") as file_obj:
            json.dump(payload, file_obj, ensure_ascii=False, indent=2)
            file_obj.flush()
            os.fsync(file_obj.fileno())
        tmp.replace(path)
    finally:
        try:
            tmp.unlink(missing_ok=True)
        except OSError:
            _log.debug("failed to clean up temp file %s", tmp)


class JsonDocumentStore:
    """One JSON document on disk holding every persisted table.

    The document is a mapping of table name (e.g. `registeredUsers`) to a list
    of records. All access goes through one re-entrant lock, so a
    read-check-write inside `transaction()` is atomic within the process.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._lock = threading.RLock()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> Dict[str, Any]:
        if not self._path.exists():
            return {}
        raw = self._path.read_text(encoding="utf-8")
        if not raw.strip():
            return {}
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError(f"{self._path} does not contain a JSON object")
        return data

    def read_table(self, name: str) -> list[Dict[str, Any]]:
        with self._lock:
            return list(self._load().get(name) or [])

    @contextmanager
    def transaction(self) -> Iterator[Dict[str, Any]]:
        """Yield the whole document; it is written back only if the block succeeds."""
        with self._lock:
            doc = self._load()
            yield doc
            atomic_write_json(self._path, doc)
