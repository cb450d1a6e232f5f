from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Mapping, Optional

from ..core.constants import (
    DAY_BUCKET,
    DAY_BUCKET_CODES,
    NIGHT_BUCKET,
    NIGHT_BUCKET_CODES,
    WEEKDAYS,
    WEEKEND_DAYS,
)
from ..core.enums import ShiftCategory
from ..core.exceptions import ValidationError
from ..cycles.model import Cycle
from ..groups.model import Group
from ..groups.resolver import resolve_group
from ..shifts.taxonomy import classify, describe, normalize_code, style_for
from .calculator.base import DutyHoursCalculator
from .calculator.standard_calculator import StandardDutyHoursCalculator

BUCKET_LABELS = {
    DAY_BUCKET: "DZIEN_06-18 [+P1]",
    NIGHT_BUCKET: "NOC_18-06 [+P2]",
}


@dataclass(frozen=True)
class RosterEntry:
    worker_idx: int
    operator_id: str
    name: str
    code: str
    group_key: Optional[str]
    show_sub_badge: bool
    badge_style: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "worker_idx": self.worker_idx,
            "id": self.operator_id,
            "name": self.name,
            "code": self.code,
            "group": self.group_key,
            "sub_badge": self.show_sub_badge,
            "badge_style": self.badge_style,
        }


@dataclass(frozen=True)
class ShiftBucket:
    key: str
    label: str
    category: ShiftCategory
    style: str
    entries: tuple[RosterEntry, ...]

    @property
    def count(self) -> int:
        return len(self.entries)

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "label": self.label,
            "category": self.category.value,
            "style": self.style,
            "count": self.count,
            "entries": [e.to_dict() for e in self.entries],
        }


@dataclass(frozen=True)
class OperatorStats:
    worker_idx: int
    operator_id: str
    name: str
    group_key: Optional[str]
    total_hours: int
    code_counts: dict[str, int]
    calendar_padding: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "worker_idx": self.worker_idx,
            "id": self.operator_id,
            "name": self.name,
            "group": self.group_key,
            "total_hours": self.total_hours,
            "code_counts": dict(self.code_counts),
            "calendar_padding": self.calendar_padding,
        }


@dataclass(frozen=True)
class FleetStats:
    worker_count: int
    day_count: int
    total_hours: int
    average_hours: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "workers": self.worker_count,
            "days": self.day_count,
            "total_hours": self.total_hours,
            "avg_hours": self.average_hours,
        }


@dataclass(frozen=True)
class ScheduleRow:
    worker_idx: int
    operator_id: str
    name: str
    group_key: Optional[str]
    shifts: tuple[str, ...]
    total_hours: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "worker_idx": self.worker_idx,
            "id": self.operator_id,
            "name": self.name,
            "group": self.group_key,
            "shifts": list(self.shifts),
            "total_hours": self.total_hours,
        }


def bucket_key(code: str) -> str:
    if code in DAY_BUCKET_CODES:
        return DAY_BUCKET
    if code in NIGHT_BUCKET_CODES:
        return NIGHT_BUCKET
    return code


def calendar_padding(weekday: Optional[str]) -> int:
    """Leading empty cells before the first day in a Monday-first calendar grid."""
    try:
        return WEEKDAYS.index(str(weekday or "").strip().upper())
    except ValueError:
        return 0


def _group_key(operator_id: str, groups: Optional[Mapping[str, Group]]) -> Optional[str]:
    if not groups:
        return None
    group = resolve_group(operator_id, groups)
    return group.key if group else None


class RosterStatsService:
    """Read-only views derived from a loaded cycle."""

    def __init__(self, *, calculator: Optional[DutyHoursCalculator] = None):
        self._calculator = calculator or StandardDutyHoursCalculator()

    def daily_roster(
        self,
        cycle: Cycle,
        day_idx: int,
        groups: Optional[Mapping[str, Group]] = None,
    ) -> list[ShiftBucket]:
        if not 0 <= day_idx < cycle.day_count:
            raise ValidationError(f"Day index {day_idx} out of range")

        grouped: dict[str, list[RosterEntry]] = {}
        for w_idx, w in enumerate(cycle.workers):
            code = normalize_code(w.shifts[day_idx] if day_idx < len(w.shifts) else "")
            if not code:
                continue
            key = bucket_key(code)
            differs = code != key
            grouped.setdefault(key, []).append(
                RosterEntry(
                    worker_idx=w_idx,
                    operator_id=w.id,
                    name=w.name,
                    code=code,
                    group_key=_group_key(w.id, groups),
                    show_sub_badge=differs,
                    # Overtime sub-badges get their own color to stand apart from day shifts.
                    badge_style="sb-n" if differs and code.startswith("N") else style_for(code),
                )
            )

        return [
            ShiftBucket(
                key=key,
                label=BUCKET_LABELS.get(key) or describe(key),
                category=classify(key),
                style=style_for(key),
                entries=tuple(grouped[key]),
            )
            for key in sorted(grouped)
        ]

    def operator_stats(
        self,
        cycle: Cycle,
        worker_idx: int,
        groups: Optional[Mapping[str, Group]] = None,
    ) -> OperatorStats:
        if not 0 <= worker_idx < len(cycle.workers):
            raise ValidationError(f"Operator index {worker_idx} out of range")

        w = cycle.workers[worker_idx]
        codes = [normalize_code(s) for s in w.shifts]
        counts = Counter(c for c in codes if c)
        first_weekday = cycle.meta.weekdays[0] if cycle.meta.weekdays else None

        return OperatorStats(
            worker_idx=worker_idx,
            operator_id=w.id,
            name=w.name,
            group_key=_group_key(w.id, groups),
            total_hours=self._calculator.total_hours(codes),
            code_counts=dict(sorted(counts.items())),
            calendar_padding=calendar_padding(first_weekday),
        )

    def fleet_stats(self, cycle: Cycle) -> FleetStats:
        total = sum(self._calculator.total_hours(w.shifts) for w in cycle.workers)
        count = len(cycle.workers)
        average = 0.0
        if count:
            # Ties round up (2.25 -> 2.3), not to even.
            average = float((Decimal(total) / Decimal(count)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
        return FleetStats(worker_count=count, day_count=cycle.day_count, total_hours=total, average_hours=average)

    def schedule_table(self, cycle: Cycle, groups: Optional[Mapping[str, Group]] = None) -> dict[str, Any]:
        columns = [
            {"idx": i, "day": d, "weekday": wd, "weekend": wd in WEEKEND_DAYS}
            for i, (d, wd) in enumerate(zip(cycle.meta.days, cycle.meta.weekdays))
        ]
        rows = [
            ScheduleRow(
                worker_idx=i,
                operator_id=w.id,
                name=w.name,
                group_key=_group_key(w.id, groups),
                shifts=tuple(w.shifts),
                total_hours=self._calculator.total_hours(w.shifts),
            )
            for i, w in enumerate(cycle.workers)
        ]
        return {"columns": columns, "rows": rows}

    @staticmethod
    def search_operators(cycle: Cycle, query: str = "") -> list[tuple[int, str, str]]:
        needle = (query or "").lower()
        return [(i, w.id, w.name) for i, w in enumerate(cycle.workers) if needle in w.name.lower()]
