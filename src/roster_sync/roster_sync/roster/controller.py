from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.responses import error_response, json_body, notice_response
from ..common.validators import require_int
from ..container import Container
from ..core.enums import NoticeLevel
from ..core.exceptions import ValidationError
from .model import Notice

_NO_DATA = "NO_DATA_LOADED"


def register(app: Flask, container: Container) -> None:
    roster = container.roster_service

    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    def dashboard():
        try:
            data = roster.dashboard()
        except ValidationError as e:
            return error_response(str(e))
        if data is None:
            return error_response(_NO_DATA, 404)
        return jsonify(data)

    @app.route("/api/navigation/day", methods=["POST"], endpoint="navigation_day")
    def navigation_day():
        try:
            delta = require_int(json_body().get("delta", 1), "delta")
        except ValidationError as e:
            return error_response(str(e))
        moved = roster.step_day(delta)
        return jsonify({"ok": True, "moved": moved, "day_idx": roster.store.current_day_idx})

    @app.route("/api/navigation/month", methods=["POST"], endpoint="navigation_month")
    def navigation_month():
        try:
            delta = require_int(json_body().get("delta", 1), "delta")
        except ValidationError as e:
            return error_response(str(e))
        return notice_response(roster.step_month(delta), day_idx=roster.store.current_day_idx)

    @app.route("/api/navigation/jump", methods=["POST"], endpoint="navigation_jump")
    def navigation_jump():
        try:
            idx = require_int(json_body().get("idx"), "idx")
        except ValidationError as e:
            return error_response(str(e))
        roster.jump_to_day(idx)
        return jsonify({"ok": True, "day_idx": roster.store.current_day_idx})

    @app.route("/api/schedule", methods=["GET"], endpoint="schedule")
    def schedule():
        data = roster.schedule()
        if data is None:
            return error_response(_NO_DATA, 404)
        return jsonify(data)

    @app.route("/api/shifts", methods=["POST"], endpoint="edit_shift")
    def edit_shift():
        try:
            body = json_body()
            worker_idx = require_int(body.get("worker_idx"), "worker_idx")
            day_idx = require_int(body.get("day_idx"), "day_idx")
        except ValidationError as e:
            return error_response(str(e))
        notice = roster.edit_shift(worker_idx, day_idx, str(body.get("value") or ""))
        return notice_response(notice)

    @app.route("/api/lock", methods=["POST"], endpoint="toggle_lock")
    def toggle_lock():
        notice = roster.toggle_lock()
        return notice_response(notice, locked=roster.store.is_locked)

    @app.route("/api/theme", methods=["POST"], endpoint="toggle_theme")
    def toggle_theme():
        theme = roster.toggle_theme()
        return notice_response(
            Notice(NoticeLevel.INFO, f"THEME_{theme.value.upper()}"),
            theme=theme.value,
            palette=roster.groups.palette(theme),
        )

    @app.route("/api/operators", methods=["GET"], endpoint="operators")
    def operators():
        return jsonify(roster.search(request.args.get("q", "")))

    @app.route("/api/operators/<int:worker_idx>", methods=["GET"], endpoint="operator_profile")
    def operator_profile(worker_idx: int):
        try:
            data = roster.operator_profile(worker_idx)
        except ValidationError as e:
            return error_response(str(e), 404)
        if data is None:
            return error_response(_NO_DATA, 404)
        return jsonify(data)

    @app.route("/api/stats", methods=["GET"], endpoint="fleet_stats")
    def fleet_stats():
        stats = roster.fleet()
        if stats is None:
            return error_response(_NO_DATA, 404)
        return jsonify(stats.to_dict())
