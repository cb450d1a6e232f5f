from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..core.enums import NoticeLevel


@dataclass(frozen=True)
class Notice:
    """Short status message shown to the user after an operation."""

    level: NoticeLevel
    message: str
    needs_config: bool = False

    @property
    def ok(self) -> bool:
        return self.level in (NoticeLevel.INFO, NoticeLevel.SUCCESS)

    def to_dict(self) -> dict[str, Any]:
        return {"level": self.level.value, "message": self.message, "needs_config": self.needs_config}
