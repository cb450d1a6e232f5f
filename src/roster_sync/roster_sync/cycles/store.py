from __future__ import annotations

from typing import Optional

from loguru import logger

from ..cache.repository import CacheRepository
from ..core.constants import SLOT_DATA
from ..core.exceptions import MonthBoundary, ValidationError
from ..sync.codec import serialize_cycle
from .model import Cycle, MonthRange
from .segmenter import month_containing, month_index_containing, segment


class CycleStore:
    """The single in-memory cycle plus the viewing cursor and edit lock.

    Month ranges are recomputed whenever the cycle is replaced; shift edits
    never change them.
    """

    def __init__(self, cache: CacheRepository):
        self._cache = cache
        self.cycle: Optional[Cycle] = None
        self.current_day_idx = 0
        self.is_locked = True
        self.month_ranges: list[MonthRange] = []
        self.stream_label: Optional[str] = None

    @property
    def loaded(self) -> bool:
        return self.cycle is not None

    def replace(self, cycle: Cycle, *, stream_label: Optional[str] = None) -> None:
        self.cycle = cycle
        self.stream_label = stream_label
        self.month_ranges = segment(cycle, stream_label)
        if not 0 <= self.current_day_idx < cycle.day_count:
            self.current_day_idx = 0

    def resegment(self, stream_label: Optional[str] = None) -> None:
        if stream_label is not None:
            self.stream_label = stream_label
        if self.cycle is not None:
            self.month_ranges = segment(self.cycle, self.stream_label)

    def clear(self) -> None:
        self.cycle = None
        self.month_ranges = []
        self.current_day_idx = 0

    def toggle_lock(self) -> bool:
        self.is_locked = not self.is_locked
        return self.is_locked

    def set_shift(self, worker_idx: int, day_idx: int, raw_value: str) -> None:
        if self.cycle is None:
            return
        if not 0 <= worker_idx < len(self.cycle.workers):
            raise ValidationError(f"Operator index {worker_idx} out of range")
        shifts = self.cycle.workers[worker_idx].shifts
        if not 0 <= day_idx < len(shifts):
            raise ValidationError(f"Day index {day_idx} out of range")

        shifts[day_idx] = str(raw_value or "").upper()
        self.persist()

    def persist(self) -> None:
        """Mirror the current document into the cache (no batching)."""
        if self.cycle is None:
            return
        self._cache.set(SLOT_DATA, serialize_cycle(self.cycle))

    def step_day(self, delta: int) -> bool:
        if self.cycle is None:
            return False
        new_idx = self.current_day_idx + int(delta)
        if 0 <= new_idx < self.cycle.day_count:
            self.current_day_idx = new_idx
            return True
        return False

    def step_month(self, delta: int) -> MonthRange:
        if self.cycle is None:
            raise MonthBoundary("NO_CYCLE_LOADED")
        m_idx = month_index_containing(self.month_ranges, self.current_day_idx)
        if m_idx is None:
            raise MonthBoundary("SECTOR_UNKNOWN")

        target = m_idx + int(delta)
        if not 0 <= target < len(self.month_ranges):
            logger.warning(f"Month step {delta:+d} from range {m_idx} leaves the cycle")
            raise MonthBoundary("END_OF_DATA_STREAM. CHECK_DATA_STREAM_SELECTOR")

        self.current_day_idx = self.month_ranges[target].start
        return self.month_ranges[target]

    def jump_to_day(self, absolute_idx: int) -> None:
        # Caller owns the bounds check.
        self.current_day_idx = int(absolute_idx)

    def focus_day(self, day_of_month: int) -> int:
        """Point the cursor at the first occurrence of a day-of-month, else at 0."""
        self.current_day_idx = 0
        if self.cycle is not None:
            for i, d in enumerate(self.cycle.meta.days):
                if d == day_of_month:
                    self.current_day_idx = i
                    break
        return self.current_day_idx

    def current_month(self) -> Optional[MonthRange]:
        return month_containing(self.month_ranges, self.current_day_idx)
