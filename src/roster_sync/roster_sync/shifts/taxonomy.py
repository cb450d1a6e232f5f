from __future__ import annotations

from typing import Optional

from ..core.constants import FULL_SHIFT_CODES
from ..core.enums import ShiftCategory

SHIFT_LABELS: dict[str, str] = {
    "1": "DZIEN_06-18",
    "2": "NOC_18-06",
    "P1": "PARKING_D1",
    "P2": "PARKING_D2",
    "N1": "NAGODZINY_N1",
    "N2": "NAGODZINY_N2",
    "NP1": "NAGODZINY_P1",
    "NP2": "NAGODZINY_P2",
    "X": "ABSENCJA_CRITICAL",
    "U": "URLOP_WYPEŁNIONY",
    "S1": "SZKOLENIE_TECH",
    "S2": "SZKOLENIE_TECH",
    "ZW": "ZWOLNIENIE_LEK",
    "W": "WOLNE_WEEKEND",
}

# Badge style per category. OVERTIME renders like a day shift, UNKNOWN like a critical absence.
CATEGORY_STYLES: dict[ShiftCategory, str] = {
    ShiftCategory.DAY: "sb-1",
    ShiftCategory.NIGHT: "sb-2",
    ShiftCategory.PARKING: "sb-p",
    ShiftCategory.OVERTIME: "sb-1",
    ShiftCategory.CRITICAL_ABSENCE: "sb-x",
    ShiftCategory.LEAVE: "sb-u",
    ShiftCategory.TRAINING: "sb-s",
    ShiftCategory.UNKNOWN: "sb-x",
}


def normalize_code(raw: Optional[str]) -> str:
    """Trim and upper-case a raw shift code; None becomes an empty code."""
    if raw is None:
        return ""
    return str(raw).strip().upper()


def classify(code: Optional[str]) -> ShiftCategory:
    c = normalize_code(code)
    if c == "1":
        return ShiftCategory.DAY
    if c == "2":
        return ShiftCategory.NIGHT
    if c.startswith("P"):
        return ShiftCategory.PARKING
    if c.startswith("N"):
        return ShiftCategory.OVERTIME
    if c == "X":
        return ShiftCategory.CRITICAL_ABSENCE
    if c in ("U", "ZW"):
        return ShiftCategory.LEAVE
    if c == "S":
        return ShiftCategory.TRAINING
    return ShiftCategory.UNKNOWN


def counts_as_full_shift(code: Optional[str]) -> bool:
    """True when the code is paid as a full 12h shift.

    Deliberately independent from classify(): NP1/NP2 are overtime but not full shifts.
    """
    return normalize_code(code) in FULL_SHIFT_CODES


def style_for(code: Optional[str]) -> str:
    return CATEGORY_STYLES[classify(code)]


def is_recognized(code: Optional[str]) -> bool:
    return normalize_code(code) in SHIFT_LABELS


def describe(code: Optional[str]) -> str:
    c = normalize_code(code)
    return SHIFT_LABELS.get(c, f"STATUS_{c}")
