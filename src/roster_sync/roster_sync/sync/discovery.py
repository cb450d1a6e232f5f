from __future__ import annotations

from typing import Callable, Iterable

import requests
from loguru import logger

from ..core.constants import RESERVED_STREAM_FILE, STREAM_PREFIX, STREAM_SUFFIX
from ..core.exceptions import DiscoveryFailure
from ..cycles.model import StreamDescriptor
from ..settings.model import RemoteConfig
from .client import ContentStoreClient

OFFLINE_STREAMS = (
    StreamDescriptor(id="LOCAL_DEC", label="GRUDZIEN (OFFLINE)", file="w5g-grudzien.json"),
    StreamDescriptor(id="LOCAL_JAN", label="STYCZEN (OFFLINE)", file="w5g-styczen.json"),
)
FALLBACK_STREAMS = (StreamDescriptor(id="FALLBACK", label="SYSTEM_OFFLINE", file="w5g-grudzien.json"),)


def is_stream_file(name: str) -> bool:
    return name.startswith(STREAM_PREFIX) and name.endswith(STREAM_SUFFIX) and name != RESERVED_STREAM_FILE


def stream_from_filename(name: str) -> StreamDescriptor:
    core = name[len(STREAM_PREFIX) : len(name) - len(STREAM_SUFFIX)].upper()
    return StreamDescriptor(id=core, label=core, file=name)


def streams_from_listing(names: Iterable[str]) -> list[StreamDescriptor]:
    streams = [stream_from_filename(n) for n in names if is_stream_file(n)]
    streams.sort(key=lambda s: s.id)
    return streams


class StreamDiscovery:
    """Enumerate the cycle documents available on the remote store.

    Never returns an empty list on failure: callers get a fixed offline list
    and must not treat the result as live remote state.
    """

    def __init__(self, client: ContentStoreClient, config: Callable[[], RemoteConfig]):
        self._client = client
        self._config = config

    def fetch(self) -> list[StreamDescriptor]:
        """Strict variant: raises DiscoveryFailure instead of falling back."""
        config = self._config()
        try:
            res = self._client.list_root(config)
        except requests.RequestException as e:
            raise DiscoveryFailure(f"DISCOVERY_ERROR: {e}") from e

        if not 200 <= res.status_code < 300:
            raise DiscoveryFailure(f"HTTP {res.status_code}", status=res.status_code)

        try:
            files = res.json()
        except ValueError as e:
            raise DiscoveryFailure("INVALID_REPO_STRUCTURE") from e
        if not isinstance(files, list):
            raise DiscoveryFailure("INVALID_REPO_STRUCTURE")

        return streams_from_listing(str(f.get("name", "")) for f in files if isinstance(f, dict))

    def discover(self) -> list[StreamDescriptor]:
        try:
            streams = self.fetch()
        except DiscoveryFailure as e:
            if e.status is not None:
                logger.warning(f"[DISCOVERY_FAIL] {e}")
                return list(OFFLINE_STREAMS)
            logger.error(f"DISCOVERY_ERROR: {e}")
            return list(FALLBACK_STREAMS)

        if streams:
            logger.info(f"DISCOVERED {len(streams)} DATA_STREAMS")
        return streams
