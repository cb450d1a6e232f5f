from __future__ import annotations

from datetime import date
from typing import Any, Callable, Mapping, Optional

from loguru import logger

from ..cache.repository import CacheRepository
from ..core.constants import SLOT_DATA, WEEKDAYS, WEEKEND_DAYS
from ..core.enums import NoticeLevel, Theme
from ..core.exceptions import (
    DomainError,
    EditLocked,
    MissingCredential,
    MonthBoundary,
    RemoteReferenceInvalid,
)
from ..cycles.model import StreamDescriptor
from ..cycles.store import CycleStore
from ..groups.resolver import group_ranges
from ..groups.service import GroupSettingsService
from ..settings.service import ConfigService
from ..shifts.taxonomy import is_recognized, normalize_code, style_for
from ..stats.service import FleetStats, RosterStatsService
from ..sync.codec import parse_cycle
from ..sync.discovery import StreamDiscovery
from ..sync.gateway import SyncGateway
from .model import Notice


class RosterService:
    """Application context: owns every piece of mutable state and exposes the use cases.

    Each operation catches domain failures at its boundary, logs them and
    returns a Notice, so nothing escapes to the web layer unhandled.
    """

    def __init__(
        self,
        *,
        config: ConfigService,
        store: CycleStore,
        gateway: SyncGateway,
        discovery: StreamDiscovery,
        groups: GroupSettingsService,
        stats: RosterStatsService,
        cache: CacheRepository,
    ):
        self._config = config
        self.store = store
        self.gateway = gateway
        self._discovery = discovery
        self.groups = groups
        self._stats = stats
        self._cache = cache
        self.streams: list[StreamDescriptor] = []
        self.theme = Theme.DARK

    @property
    def config(self):
        return self._config.config

    # --- helpers -------------------------------------------------------------

    def _run(self, action: Callable[[], Notice], operation: str) -> Notice:
        try:
            return action()
        except MissingCredential:
            logger.warning(f"{operation}: no credential configured")
            return Notice(NoticeLevel.WARNING, "ACCESS_TOKEN_REQUIRED: open configuration", needs_config=True)
        except RemoteReferenceInvalid as e:
            return Notice(NoticeLevel.ERROR, f"{e} (Check Branch?)")
        except (MonthBoundary, EditLocked) as e:
            return Notice(NoticeLevel.WARNING, str(e))
        except DomainError as e:
            logger.error(f"{operation} failed: {e}")
            return Notice(NoticeLevel.ERROR, f"ERROR: {e}")

    def active_stream(self) -> Optional[StreamDescriptor]:
        return next((s for s in self.streams if s.file == self.config.path), None)

    def stream_label(self) -> Optional[str]:
        stream = self.active_stream()
        return stream.label if stream else None

    # --- lifecycle -----------------------------------------------------------

    def bootstrap(self, today: Optional[date] = None) -> Optional[Notice]:
        """Startup sequence: config, groups, discovery, last stream, cached cycle."""
        self._config.load()
        self.groups.load()
        self.streams = self._discovery.discover()

        files = [s.file for s in self.streams]
        last = self._config.last_active_path()
        if last and last in files:
            self.config.path = last
        elif files:
            self.config.path = files[0]

        if not self.load_cached():
            self.store.current_day_idx = 0
            return None

        self.store.focus_day((today or date.today()).day)
        return Notice(NoticeLevel.INFO, f"CACHE_LOADED: {self.config.path}")

    def load_cached(self) -> bool:
        saved = self._cache.get(SLOT_DATA)
        if not saved:
            return False
        try:
            cycle = parse_cycle(saved)
        except DomainError as e:
            logger.error(f"CACHE_DATA_LOAD_FAIL: {e}")
            return False

        # Legacy caches carry the last known sha inside the document.
        cached_sha = cycle.extra.pop("_sha", None)
        if cached_sha:
            self.gateway.adopt_hash(str(cached_sha))
        self.store.replace(cycle, stream_label=self.stream_label())
        return True

    # --- sync ----------------------------------------------------------------

    def pull(self) -> Notice:
        def action() -> Notice:
            self.gateway.pull(self.config.path, stream_label=self.stream_label())
            return Notice(NoticeLevel.SUCCESS, "DATA_PULL_SUCCESSFUL")

        return self._run(action, "pull")

    def push(self) -> Notice:
        def action() -> Notice:
            sha = self.gateway.push()
            return Notice(NoticeLevel.SUCCESS, f"REMOTE_STORAGE_UPDATED {sha[:7]}")

        return self._run(action, "push")

    def rediscover(self) -> list[StreamDescriptor]:
        self.streams = self._discovery.discover()
        self.store.resegment(self.stream_label())
        return self.streams

    def switch_stream(self, path: str) -> Notice:
        if path == self.config.path:
            return Notice(NoticeLevel.INFO, f"STREAM_ALREADY_MOUNTED: {path}")

        def action() -> Notice:
            logger.info(f"MOUNTING_STREAM: {path}")
            self._config.set_active_path(path)
            # Unsynced edits of the previous stream are dropped from memory.
            self.store.clear()
            self.gateway.reset()
            return self.pull()

        return self._run(action, "switch_stream")

    def save_configuration(self, *, token: str, repo: Optional[str] = None) -> Notice:
        def action() -> Notice:
            self._config.save_configuration(token=token, repo=repo)
            return Notice(NoticeLevel.SUCCESS, "CONFIG_UPDATED")

        return self._run(action, "save_configuration")

    # --- editing & navigation ------------------------------------------------

    def edit_shift(self, worker_idx: int, day_idx: int, value: str) -> Notice:
        def action() -> Notice:
            if self.store.is_locked:
                raise EditLocked("ACCESS_RESTRICTED: unlock the roster first")
            if not self.store.loaded:
                return Notice(NoticeLevel.INFO, "NO_DATA_LOADED")
            self.store.set_shift(int(worker_idx), int(day_idx), value)
            code = normalize_code(value)
            if code and not is_recognized(code):
                # Stored as typed; only flagged, never rejected.
                logger.warning(f"Unrecognized shift code {code!r} at operator {worker_idx}, day {day_idx}")
                return Notice(NoticeLevel.WARNING, f"SHIFT_UPDATED: UNRECOGNIZED_CODE {code}")
            return Notice(NoticeLevel.SUCCESS, "SHIFT_UPDATED")

        return self._run(action, "edit_shift")

    def toggle_lock(self) -> Notice:
        if self.store.toggle_lock():
            return Notice(NoticeLevel.INFO, "ACCESS_RESTRICTED")
        return Notice(NoticeLevel.WARNING, "WRITE_ACCESS_GRANTED")

    def step_day(self, delta: int) -> bool:
        return self.store.step_day(delta)

    def step_month(self, delta: int) -> Notice:
        def action() -> Notice:
            month = self.store.step_month(delta)
            return Notice(NoticeLevel.INFO, month.name)

        return self._run(action, "step_month")

    def jump_to_day(self, idx: int) -> None:
        self.store.jump_to_day(idx)

    def toggle_theme(self) -> Theme:
        self.theme = Theme.LIGHT if self.theme == Theme.DARK else Theme.DARK
        return self.theme

    # --- group matrix --------------------------------------------------------

    def group_matrix(self) -> list[dict[str, Any]]:
        return [
            {**g.to_dict(), "key": g.key, "to": upper, "color": g.color_for(self.theme)}
            for g, _, upper in group_ranges(self.groups.groups)
        ]

    def save_groups(self, changes: Mapping[str, Mapping[str, Any]]) -> Notice:
        def action() -> Notice:
            self.groups.update(changes)
            if self.config.has_credential:
                self.groups.sync_remote()
                return Notice(NoticeLevel.SUCCESS, "MATRIX_UPDATED: Colors & Ranges Synced")
            return Notice(NoticeLevel.SUCCESS, "MATRIX_UPDATED: saved locally")

        return self._run(action, "save_groups")

    # --- read models ---------------------------------------------------------

    def dashboard(self) -> Optional[dict[str, Any]]:
        cycle = self.store.cycle
        if cycle is None:
            return None
        idx = self.store.current_day_idx
        month = self.store.current_month()
        buckets = self._stats.daily_roster(cycle, idx, self.groups.groups)
        return {
            "day_idx": idx,
            "day_counter": f"{idx + 1}/{cycle.day_count}",
            "day": cycle.meta.days[idx],
            "weekday": cycle.meta.weekdays[idx],
            "month": month.name if month else "SECTOR_UNKNOWN",
            "stream": self.stream_label() or self.config.path,
            "buckets": [b.to_dict() for b in buckets],
        }

    def operator_profile(self, worker_idx: int) -> Optional[dict[str, Any]]:
        cycle = self.store.cycle
        if cycle is None:
            return None
        stats = self._stats.operator_stats(cycle, worker_idx, self.groups.groups)
        shifts = cycle.workers[worker_idx].shifts
        cells = [
            {
                "day": d,
                "weekday": wd,
                "weekend": wd in WEEKEND_DAYS,
                "code": normalize_code(shifts[i]),
                "style": style_for(shifts[i]) if normalize_code(shifts[i]) else None,
            }
            for i, (d, wd) in enumerate(zip(cycle.meta.days, cycle.meta.weekdays))
        ]
        return {**stats.to_dict(), "calendar_header": list(WEEKDAYS), "calendar": cells}

    def fleet(self) -> Optional[FleetStats]:
        if self.store.cycle is None:
            return None
        return self._stats.fleet_stats(self.store.cycle)

    def schedule(self) -> Optional[dict[str, Any]]:
        if self.store.cycle is None:
            return None
        table = self._stats.schedule_table(self.store.cycle, self.groups.groups)
        return {
            "locked": self.store.is_locked,
            "columns": table["columns"],
            "rows": [r.to_dict() for r in table["rows"]],
        }

    def search(self, query: str = "") -> list[dict[str, Any]]:
        if self.store.cycle is None:
            return []
        return [
            {"worker_idx": i, "id": op_id, "name": name, "group": getattr(self.groups.resolve(op_id), "key", None)}
            for i, op_id, name in self._stats.search_operators(self.store.cycle, query)
        ]

    def status(self) -> dict[str, Any]:
        sha = self.gateway.content_hash
        return {
            "state": self.gateway.state.value,
            "sha": sha[:7] if sha else None,
            "path": self.config.path,
            "branch": self.config.branch,
            "repo": self.config.repo_slug,
            "has_credential": self.config.has_credential,
            "locked": self.store.is_locked,
            "theme": self.theme.value,
            "loaded": self.store.loaded,
            "months": [m.to_dict() for m in self.store.month_ranges],
            "streams": [s.to_dict() for s in self.streams],
            "palette": self.groups.palette(self.theme),
        }
