from __future__ import annotations

from flask import Flask, jsonify

from ..common.responses import error_response, json_body, notice_response
from ..common.validators import require_non_empty
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    roster = container.roster_service

    @app.route("/api/sync/pull", methods=["POST"], endpoint="sync_pull")
    def sync_pull():
        return notice_response(roster.pull(), status=roster.status())

    @app.route("/api/sync/push", methods=["POST"], endpoint="sync_push")
    def sync_push():
        return notice_response(roster.push(), status=roster.status())

    @app.route("/api/status", methods=["GET"], endpoint="sync_status")
    def sync_status():
        return jsonify(roster.status())

    @app.route("/api/streams", methods=["GET"], endpoint="streams")
    def streams():
        return jsonify([s.to_dict() for s in roster.streams])

    @app.route("/api/streams/discover", methods=["POST"], endpoint="streams_discover")
    def streams_discover():
        return jsonify([s.to_dict() for s in roster.rediscover()])

    @app.route("/api/streams/switch", methods=["POST"], endpoint="streams_switch")
    def streams_switch():
        try:
            path = require_non_empty(str(json_body().get("path") or ""), "path")
        except ValidationError as e:
            return error_response(str(e))
        return notice_response(roster.switch_stream(path), status=roster.status())
