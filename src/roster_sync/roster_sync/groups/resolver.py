from __future__ import annotations

import re
from typing import Iterable, Mapping, Optional, Union

from .model import Group

GroupTable = Union[Mapping[str, Group], Iterable[Group]]

_LEADING_INT = re.compile(r"\s*[+-]?\d+")


def _as_list(groups: GroupTable) -> list[Group]:
    if isinstance(groups, Mapping):
        return list(groups.values())
    return list(groups)


def sorted_groups(groups: GroupTable) -> list[Group]:
    # Stable sort: insertion order decides between equal `from_id` values.
    return sorted(_as_list(groups), key=lambda g: g.from_id)


def parse_operator_id(operator_id: object) -> Optional[int]:
    """Leading integer of the id, so "12a" reads as 12; None when there is none."""
    if operator_id is None:
        return None
    match = _LEADING_INT.match(str(operator_id))
    return int(match.group(0)) if match else None


def resolve_group(operator_id: object, groups: GroupTable) -> Optional[Group]:
    """Find the group whose [from, next_from) range contains the operator id.

    The order is recomputed on every call because `from` values are editable at runtime.
    """
    pid = parse_operator_id(operator_id)
    if pid is None:
        return None

    ordered = sorted_groups(groups)
    for i, group in enumerate(ordered):
        next_from = ordered[i + 1].from_id if i + 1 < len(ordered) else None
        if pid >= group.from_id and (next_from is None or pid < next_from):
            return group
    return None


def group_ranges(groups: GroupTable) -> list[tuple[Group, int, Optional[int]]]:
    """Rows for the group matrix editor: (group, from, inclusive upper bound or None)."""
    ordered = sorted_groups(groups)
    rows = []
    for i, group in enumerate(ordered):
        upper = ordered[i + 1].from_id - 1 if i + 1 < len(ordered) else None
        rows.append((group, group.from_id, upper))
    return rows
