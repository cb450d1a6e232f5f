from __future__ import annotations

import json
import time
from typing import Any, Callable, Mapping, Optional

import requests
from loguru import logger

from ..cache.repository import CacheRepository
from ..common.validators import require_int
from ..core.constants import GROUP_SETTINGS_FILE, SLOT_GROUPS
from ..core.enums import Theme
from ..core.exceptions import MissingCredential, SyncFailure, ValidationError
from ..settings.model import RemoteConfig
from ..sync.client import ContentStoreClient
from ..sync.codec import dump_json, encode_content
from .defaults import DEFAULT_GROUPS
from .model import Group
from .resolver import resolve_group


class GroupSettingsService:
    """Use case: the editable group matrix (ranges and per-theme colors)."""

    def __init__(
        self,
        cache: CacheRepository,
        client: ContentStoreClient,
        config: Callable[[], RemoteConfig],
        *,
        defaults: Optional[Mapping[str, Group]] = None,
        clock: Callable[[], float] = time.time,
    ):
        self._cache = cache
        self._client = client
        self._config = config
        self._defaults = dict(defaults or DEFAULT_GROUPS)
        self._clock = clock
        self.groups: dict[str, Group] = dict(self._defaults)

    def load(self) -> dict[str, Group]:
        saved = self._cache.get(SLOT_GROUPS)
        if not saved:
            return self.groups
        try:
            parsed = json.loads(saved)
            if not isinstance(parsed, dict):
                raise ValueError("group slot is not an object")
            merged = dict(self._defaults)
            for key, default in self._defaults.items():
                stored = parsed.get(key)
                if isinstance(stored, dict):
                    merged[key] = self._merge(default, stored)
            self.groups = merged
        except (ValueError, TypeError) as e:
            logger.error(f"GROUP_CONFIG_LOAD_FAIL: {e}")
        return self.groups

    @staticmethod
    def _merge(default: Group, stored: dict[str, Any]) -> Group:
        legacy_color = stored.get("color")
        return default.with_changes(
            from_id=int(stored.get("from", default.from_id)),
            label=str(stored.get("label") or default.label),
            css_var=str(stored.get("cssVar") or default.css_var),
            color_dark=str(stored.get("colorDark") or legacy_color or default.color_dark),
            color_light=str(stored.get("colorLight") or legacy_color or default.color_light),
            icon=stored.get("icon", default.icon),
        )

    def resolve(self, operator_id: object) -> Optional[Group]:
        return resolve_group(operator_id, self.groups)

    def update(self, changes: Mapping[str, Mapping[str, Any]]) -> dict[str, Group]:
        """Apply editor changes; duplicate `from` values are rejected before anything changes."""
        updated = dict(self.groups)
        for key, change in changes.items():
            group = updated.get(key)
            if group is None:
                raise ValidationError(f"Unknown group {key!r}")
            if not isinstance(change, Mapping):
                raise ValidationError(f"Changes for group {key} must be an object")
            fields: dict[str, Any] = {}
            if change.get("from") not in (None, ""):
                fields["from_id"] = require_int(change["from"], f"{key}.from")
            if change.get("colorDark"):
                fields["color_dark"] = str(change["colorDark"])
            if change.get("colorLight"):
                fields["color_light"] = str(change["colorLight"])
            updated[key] = group.with_changes(**fields)

        seen: dict[int, str] = {}
        for key, group in updated.items():
            if group.from_id < 0:
                raise ValidationError(f"Group {key} starts below 0")
            if group.from_id in seen:
                raise ValidationError(f"Groups {seen[group.from_id]} and {key} share from={group.from_id}")
            seen[group.from_id] = key

        self.groups = updated
        self._cache.set(SLOT_GROUPS, self.to_json())
        logger.info("MATRIX_UPDATED: group ranges saved")
        return self.groups

    def to_json(self) -> str:
        return dump_json({key: g.to_dict() for key, g in self.groups.items()})

    def palette(self, theme: Theme) -> dict[str, str]:
        return {g.css_var: g.color_for(theme) for g in self.groups.values() if g.color_for(theme)}

    def sync_remote(self) -> str:
        """Upload the matrix as a settings file next to the cycle documents. Returns the new sha."""
        config = self._config()
        if not config.has_credential:
            raise MissingCredential("ACCESS_TOKEN_REQUIRED")

        sha = None
        try:
            res = self._client.get_file(config, GROUP_SETTINGS_FILE)
            if 200 <= res.status_code < 300:
                sha = res.json().get("sha")
        except (requests.RequestException, ValueError) as e:
            # Missing file is the normal first-run case; create it below.
            logger.debug(f"settings lookup skipped: {e}")

        try:
            res = self._client.put_file(
                config,
                GROUP_SETTINGS_FILE,
                content=encode_content(self.to_json()),
                message=f"SYS_MATRIX_CONFIG_UPDATE_{int(self._clock() * 1000)}",
                sha=sha,
            )
        except requests.RequestException as e:
            raise SyncFailure(None, str(e)) from e
        if not 200 <= res.status_code < 300:
            raise SyncFailure(res.status_code)

        try:
            new_sha = res.json()["content"]["sha"]
        except (ValueError, KeyError, TypeError):
            new_sha = ""
        logger.info(f"REMOTE_CONFIG_SAVED: {GROUP_SETTINGS_FILE}")
        return new_sha
