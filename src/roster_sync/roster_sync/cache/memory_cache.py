from __future__ import annotations

from typing import Optional

from .repository import CacheRepository


class InMemoryCache(CacheRepository):
    """Process-local cache, used by the testing settings."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._slots: dict[str, str] = dict(initial or {})

    def get(self, slot: str) -> Optional[str]:
        return self._slots.get(slot)

    def set(self, slot: str, value: str) -> None:
        self._slots[slot] = str(value)

    def delete(self, slot: str) -> None:
        self._slots.pop(slot, None)
