from __future__ import annotations

from ...core.constants import HOURS_PER_FULL_SHIFT
from ...shifts.taxonomy import counts_as_full_shift
from .base import DutyHoursCalculator


class StandardDutyHoursCalculator(DutyHoursCalculator):
    """Standard rule: 12h for every full shift (1, 2, P1, P2, N1, N2), 0 otherwise."""

    def __init__(self, hours_per_shift: int = HOURS_PER_FULL_SHIFT):
        self._hours_per_shift = int(hours_per_shift)

    def hours_for_code(self, code: str) -> int:
        return self._hours_per_shift if counts_as_full_shift(code) else 0
