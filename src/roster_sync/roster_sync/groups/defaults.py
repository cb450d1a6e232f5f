from __future__ import annotations

from .model import Group

_ICON_BASE = "https://api.iconify.design/game-icons"

DEFAULT_GROUPS: dict[str, Group] = {
    "D": Group("D", 0, "D", "bg-d", "#cc8a28", "#d35400", f"{_ICON_BASE}:rank-3.svg"),
    "S": Group("S", 5, "S", "bg-s", "#0052cc", "#0056b3", f"{_ICON_BASE}:rank-2.svg"),
    "L": Group("L", 10, "L", "bg-l", "#5981cc", "#3178c6", f"{_ICON_BASE}:rank-1.svg"),
    "K": Group("K", 12, "K", "bg-k", "#cc6f44", "#c0392b", f"{_ICON_BASE}:rank-1.svg"),
    "M": Group("M", 25, "M", "bg-m", "#cccc00", "#b7950b", f"{_ICON_BASE}:rank-1.svg"),
    "Y": Group("Y", 37, "Y", "bg-y", "#00cc00", "#196f3d", f"{_ICON_BASE}:rank-1.svg"),
}
