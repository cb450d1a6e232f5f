from __future__ import annotations

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Optional

from loguru import logger

from .repository import CacheRepository


class JsonFileCache(CacheRepository):
    """Slots persisted as one JSON object on disk.

    Note: every write rewrites the whole file through a temp file + os.replace,
    so a crash never leaves a half-written cache behind.
    """

    def __init__(self, path: Path | str):
        self._path = Path(path)
        # Serializes read-modify-write cycles within this process.
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.error(f"CACHE_READ_FAIL {self._path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"CACHE_INVALID_STRUCTURE {self._path}, ignoring")
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _write_all(self, slots: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=".cache-", suffix=".json", dir=str(self._path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(slots, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self._path)
        except Exception:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def get(self, slot: str) -> Optional[str]:
        return self._read_all().get(slot)

    def set(self, slot: str, value: str) -> None:
        with self._lock:
            slots = self._read_all()
            slots[slot] = str(value)
            self._write_all(slots)

    def delete(self, slot: str) -> None:
        with self._lock:
            slots = self._read_all()
            if slots.pop(slot, None) is not None:
                self._write_all(slots)
