from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

import requests

from .cache.json_file_cache import JsonFileCache
from .cache.memory_cache import InMemoryCache
from .cache.repository import CacheRepository
from .cycles.store import CycleStore
from .groups.service import GroupSettingsService
from .roster.service import RosterService
from .settings.model import RemoteConfig
from .settings.service import ConfigService
from .stats.service import RosterStatsService
from .sync.client import ContentStoreClient
from .sync.discovery import StreamDiscovery
from .sync.gateway import SyncGateway


@dataclass(frozen=True)
class Container:
    cache: CacheRepository
    client: ContentStoreClient

    config_service: ConfigService
    store: CycleStore
    gateway: SyncGateway
    discovery: StreamDiscovery
    group_service: GroupSettingsService
    stats_service: RosterStatsService
    roster_service: RosterService


def build_cache(cache_path: Optional[str]) -> CacheRepository:
    if cache_path:
        return JsonFileCache(cache_path)
    return InMemoryCache()


def build_container(
    *,
    remote: dict[str, Any],
    cache_path: Optional[str] = None,
    cache: Optional[CacheRepository] = None,
    session: Optional[requests.Session] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> Container:
    defaults = RemoteConfig(
        token=str(remote.get("token") or ""),
        owner=str(remote["owner"]),
        repo=str(remote["repo"]),
        path=str(remote["path"]),
        branch=str(remote.get("branch", "main")),
    )
    cache = cache if cache is not None else build_cache(cache_path)
    client = ContentStoreClient(
        api_url=str(remote.get("api_url", "https://api.github.com")),
        timeout=float(remote.get("timeout", 15)),
        session=session,
    )

    config_service = ConfigService(cache, defaults=defaults)

    def current_config() -> RemoteConfig:
        # Read on every call: the credential and path change at runtime.
        return config_service.config

    store = CycleStore(cache)
    gateway = SyncGateway(
        client,
        store,
        cache,
        current_config,
        settle_seconds=float(remote.get("settle_seconds", 3)),
        sleep=sleep,
    )
    discovery = StreamDiscovery(client, current_config)
    group_service = GroupSettingsService(cache, client, current_config)
    stats_service = RosterStatsService()

    roster_service = RosterService(
        config=config_service,
        store=store,
        gateway=gateway,
        discovery=discovery,
        groups=group_service,
        stats=stats_service,
        cache=cache,
    )

    return Container(
        cache=cache,
        client=client,
        config_service=config_service,
        store=store,
        gateway=gateway,
        discovery=discovery,
        group_service=group_service,
        stats_service=stats_service,
        roster_service=roster_service,
    )
