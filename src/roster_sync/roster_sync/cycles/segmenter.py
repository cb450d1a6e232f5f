from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import UNKNOWN_CYCLE_LABEL
from .model import Cycle, MonthRange


def _range_name(months: Optional[list[str]], month_idx: int, label: str, *, single: bool) -> str:
    if months and month_idx < len(months) and months[month_idx]:
        return months[month_idx]
    if single:
        return label
    return f"{label} {month_idx + 1}"


def segment(cycle: Cycle, stream_label: Optional[str] = None) -> list[MonthRange]:
    """Split the day index space into one range per calendar month.

    Heuristic: a day-of-month lower than the previous one starts a new month.
    Real calendar dates are never consulted, so noisy sequences produce extra ranges.
    """
    days = cycle.meta.days
    if not days:
        return []

    label = stream_label or UNKNOWN_CYCLE_LABEL
    months = cycle.meta.months

    boundaries = [i for i in range(1, len(days)) if days[i] < days[i - 1]]
    starts = [0, *boundaries]
    ends = [b - 1 for b in boundaries] + [len(days) - 1]
    single = len(starts) == 1

    return [
        MonthRange(start=s, end=e, name=_range_name(months, i, label, single=single))
        for i, (s, e) in enumerate(zip(starts, ends))
    ]


def month_index_containing(ranges: Sequence[MonthRange], idx: int) -> Optional[int]:
    for i, r in enumerate(ranges):
        if r.contains(idx):
            return i
    return None


def month_containing(ranges: Sequence[MonthRange], idx: int) -> Optional[MonthRange]:
    i = month_index_containing(ranges, idx)
    return ranges[i] if i is not None else None
