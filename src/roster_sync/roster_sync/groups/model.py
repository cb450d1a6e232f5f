from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional

from ..core.enums import Theme


@dataclass(frozen=True)
class Group:
    """Thực thể miền (domain): Nhóm operator theo khoảng ID.

    The upper bound is implied by the next group's `from_id`.
    """

    key: str
    from_id: int
    label: str
    css_var: str
    color_dark: str
    color_light: str
    icon: Optional[str] = None

    def color_for(self, theme: Theme) -> str:
        return self.color_light if theme == Theme.LIGHT else self.color_dark

    def with_changes(self, **changes: Any) -> "Group":
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "from": self.from_id,
            "label": self.label,
            "cssVar": self.css_var,
            "colorDark": self.color_dark,
            "colorLight": self.color_light,
            "icon": self.icon,
        }

    @classmethod
    def from_dict(cls, key: str, data: dict[str, Any]) -> "Group":
        return cls(
            key=key,
            from_id=int(data["from"]),
            label=str(data.get("label") or key),
            css_var=str(data.get("cssVar") or f"bg-{key.lower()}"),
            color_dark=str(data.get("colorDark") or ""),
            color_light=str(data.get("colorLight") or ""),
            icon=data.get("icon"),
        )
