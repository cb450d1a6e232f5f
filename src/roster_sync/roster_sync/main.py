from __future__ import annotations

import importlib
from typing import Optional

from dotenv import load_dotenv
from flask import Flask
from loguru import logger

from config import get_settings_module

from .cache.repository import CacheRepository
from .common.logger import setup_logger_from_settings
from .container import Container, build_container
from .groups.controller import register as register_groups
from .roster.controller import register as register_roster
from .settings.controller import register as register_settings
from .sync.controller import register as register_sync


def create_app(
    *,
    settings_module: Optional[str] = None,
    container: Optional[Container] = None,
    cache: Optional[CacheRepository] = None,
    bootstrap: bool = True,
) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    setup_logger_from_settings(settings)

    remote = getattr(settings, "REMOTE")
    if container is None:
        container = build_container(remote=remote, cache_path=getattr(settings, "CACHE_PATH", None), cache=cache)
    app.extensions["roster_sync"] = container

    logger.info(
        f"[roster-sync] settings={settings_module} repo={remote.get('owner')}/{remote.get('repo')}@{remote.get('branch')}"
    )

    if bootstrap:
        notice = container.roster_service.bootstrap()
        if notice:
            logger.info(notice.message)

    register_roster(app, container)
    register_sync(app, container)
    register_settings(app, container)
    register_groups(app, container)

    return app
