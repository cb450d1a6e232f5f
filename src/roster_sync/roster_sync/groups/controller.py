from __future__ import annotations

from flask import Flask, jsonify

from ..common.responses import error_response, json_body, notice_response
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    roster = container.roster_service

    @app.route("/api/groups", methods=["GET"], endpoint="groups")
    def groups():
        return jsonify(roster.group_matrix())

    @app.route("/api/groups", methods=["POST"], endpoint="groups_save")
    def groups_save():
        try:
            changes = json_body().get("groups") or {}
            if not isinstance(changes, dict):
                raise ValidationError("groups must be an object keyed by group id")
        except ValidationError as e:
            return error_response(str(e))
        notice = roster.save_groups(changes)
        return notice_response(notice, groups=roster.group_matrix())
