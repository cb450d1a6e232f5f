from __future__ import annotations

from flask import Flask, jsonify

from ..common.responses import error_response, json_body, notice_response
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    roster = container.roster_service

    @app.route("/api/config", methods=["GET"], endpoint="config_get")
    def config_get():
        cfg = roster.config
        # The credential itself never leaves the server.
        return jsonify({"repo": cfg.repo_slug, "branch": cfg.branch, "path": cfg.path, "has_credential": cfg.has_credential})

    @app.route("/api/config", methods=["POST"], endpoint="config_save")
    def config_save():
        try:
            body = json_body()
        except ValidationError as e:
            return error_response(str(e))
        notice = roster.save_configuration(token=str(body.get("token") or ""), repo=body.get("repo"))
        return notice_response(notice, repo=roster.config.repo_slug)
