from __future__ import annotations

import json
from typing import Optional

from loguru import logger

from ..cache.repository import CacheRepository
from ..common.validators import require_non_empty
from ..core.constants import SLOT_ACTIVE_MODULE, SLOT_CONFIG
from ..core.exceptions import ValidationError
from .model import RemoteConfig


class ConfigService:
    """Use case: load and save the remote configuration through the cache mirror."""

    def __init__(self, cache: CacheRepository, *, defaults: Optional[RemoteConfig] = None):
        self._cache = cache
        self._defaults = defaults or RemoteConfig()
        self.config = RemoteConfig(**self._defaults.to_dict())

    def load(self) -> RemoteConfig:
        saved = self._cache.get(SLOT_CONFIG)
        if saved:
            try:
                data = json.loads(saved)
                if not isinstance(data, dict):
                    raise ValueError("config slot is not an object")
                self.config = RemoteConfig.from_dict(data, defaults=self._defaults)
            except ValueError as e:
                logger.error(f"CONFIG_LOAD_FAIL: {e}")
        return self.config

    def save_configuration(self, *, token: str, repo: Optional[str] = None) -> RemoteConfig:
        slug = (repo or "").strip() or self._defaults.repo_slug
        if "/" in slug:
            owner, _, name = slug.partition("/")
            owner = require_non_empty(owner, "owner")
            name = require_non_empty(name, "repo")
            if "/" in name:
                raise ValidationError(f"Invalid repository: {slug}")
            self.config.owner = owner
            self.config.repo = name
        else:
            self.config.repo = slug

        self.config.token = (token or "").strip()
        self._persist()
        logger.info(f"Configuration saved for {self.config.repo_slug}")
        return self.config

    def set_active_path(self, path: str) -> None:
        self.config.path = require_non_empty(path, "path")
        self._cache.set(SLOT_ACTIVE_MODULE, self.config.path)

    def last_active_path(self) -> Optional[str]:
        return self._cache.get(SLOT_ACTIVE_MODULE)

    def _persist(self) -> None:
        self._cache.set(SLOT_CONFIG, json.dumps(self.config.to_dict()))
