from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence


class DutyHoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for duty hours)."""

    @abstractmethod
    def hours_for_code(self, code: str) -> int:
        raise NotImplementedError

    def total_hours(self, shifts: Sequence[str]) -> int:
        return sum(self.hours_for_code(s) for s in shifts)
