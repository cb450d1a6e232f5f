from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ..core.exceptions import ValidationError


@dataclass
class Operator:
    """Thực thể miền (domain): Operator trong lịch trực."""

    id: str
    name: str
    shifts: list[str]
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {**self.extra, "id": self.id, "name": self.name, "shifts": list(self.shifts)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Operator":
        if not isinstance(data, dict):
            raise ValidationError("Operator entry must be an object")
        shifts = data.get("shifts")
        if not isinstance(shifts, list):
            raise ValidationError(f"Operator {data.get('id')!r} has no shifts list")
        extra = {k: v for k, v in data.items() if k not in ("id", "name", "shifts")}
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            shifts=["" if s is None else str(s) for s in shifts],
            extra=extra,
        )


@dataclass
class CycleMeta:
    days: list[int]
    weekdays: list[str]
    months: Optional[list[str]] = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {**self.extra, "days": list(self.days), "weekdays": list(self.weekdays)}
        if self.months is not None:
            out["months"] = list(self.months)
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CycleMeta":
        if not isinstance(data, dict):
            raise ValidationError("meta must be an object")
        try:
            days = [int(d) for d in data.get("days") or []]
        except (TypeError, ValueError) as e:
            raise ValidationError(f"meta.days must hold integers: {e}") from e
        months = data.get("months")
        extra = {k: v for k, v in data.items() if k not in ("days", "weekdays", "months")}
        return cls(
            days=days,
            weekdays=[str(w) for w in data.get("weekdays") or []],
            months=[str(m) for m in months] if isinstance(months, list) else None,
            extra=extra,
        )


@dataclass
class Cycle:
    """The roster document for one period: day metadata plus every operator's shifts."""

    meta: CycleMeta
    workers: list[Operator]
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def day_count(self) -> int:
        return len(self.meta.days)

    def validate(self) -> None:
        n = len(self.meta.days)
        if len(self.meta.weekdays) != n:
            raise ValidationError(f"weekdays ({len(self.meta.weekdays)}) do not match days ({n})")
        for w in self.workers:
            if len(w.shifts) != n:
                raise ValidationError(f"Operator {w.id} has {len(w.shifts)} shifts, expected {n}")

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.extra,
            "meta": self.meta.to_dict(),
            "workers": [w.to_dict() for w in self.workers],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Cycle":
        if not isinstance(data, dict):
            raise ValidationError("Cycle document must be a JSON object")
        workers = data.get("workers") or []
        if not isinstance(workers, list):
            raise ValidationError("workers must be a list")
        extra = {k: v for k, v in data.items() if k not in ("meta", "workers")}
        cycle = cls(
            meta=CycleMeta.from_dict(data.get("meta") or {}),
            workers=[Operator.from_dict(w) for w in workers],
            extra=extra,
        )
        cycle.validate()
        return cycle


@dataclass(frozen=True)
class MonthRange:
    start: int
    end: int
    name: str

    def contains(self, idx: int) -> bool:
        return self.start <= idx <= self.end

    def to_dict(self) -> dict[str, Any]:
        return {"start": self.start, "end": self.end, "name": self.name}


@dataclass(frozen=True)
class StreamDescriptor:
    """One selectable cycle document discovered on the remote store."""

    id: str
    label: str
    file: str

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "label": self.label, "file": self.file}
