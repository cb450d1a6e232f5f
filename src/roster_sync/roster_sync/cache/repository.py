from __future__ import annotations

from typing import Optional, Protocol


class CacheRepository(Protocol):
    """Local mirror of the remote state: named slots holding opaque strings."""

    def get(self, slot: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, slot: str, value: str) -> None:
        raise NotImplementedError

    def delete(self, slot: str) -> None:
        raise NotImplementedError
