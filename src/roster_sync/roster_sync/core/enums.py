from __future__ import annotations

from enum import Enum


class ShiftCategory(str, Enum):
    """Phân loại mã ca dùng cho hiển thị và tổng hợp."""

    DAY = "DAY"
    NIGHT = "NIGHT"
    PARKING = "PARKING"
    OVERTIME = "OVERTIME"
    CRITICAL_ABSENCE = "CRITICAL_ABSENCE"
    LEAVE = "LEAVE"
    TRAINING = "TRAINING"
    UNKNOWN = "UNKNOWN"


class SyncState(str, Enum):
    """Trạng thái của cổng đồng bộ (chỉ một lượt truyền tại một thời điểm)."""

    IDLE = "IDLE"
    PULLING = "PULLING"
    PUSHING = "PUSHING"


class Theme(str, Enum):
    DARK = "dark"
    LIGHT = "light"


class NoticeLevel(str, Enum):
    """Mức độ thông báo trả về cho người dùng."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
