from __future__ import annotations

from typing import Any, Optional

from flask import jsonify, request

from ..core.exceptions import ValidationError
from ..roster.model import Notice


def notice_response(notice: Optional[Notice], **extra: Any):
    body: dict[str, Any] = {"ok": notice.ok if notice else True, **extra}
    if notice:
        body["notice"] = notice.to_dict()
    return jsonify(body)


def error_response(message: str, status: int = 400):
    return jsonify({"ok": False, "notice": {"level": "error", "message": message, "needs_config": False}}), status


def json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
