from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

import requests
from loguru import logger

from ..cache.repository import CacheRepository
from ..core.constants import DEFAULT_SETTLE_SECONDS, SLOT_DATA
from ..core.enums import SyncState
from ..core.exceptions import (
    MissingCredential,
    NoDataToPush,
    PushConflict,
    RemoteReferenceInvalid,
    SyncFailure,
    SyncInProgress,
)
from ..cycles.model import Cycle
from ..cycles.store import CycleStore
from ..settings.model import RemoteConfig
from .client import ContentStoreClient
from .codec import decode_content, encode_content, parse_cycle, serialize_cycle

_NOT_FOUND_STATUSES = (404, 422)


def _is_success(status: int) -> bool:
    return 200 <= int(status) < 300


class SyncGateway:
    """Pull/push the cycle document with content-hash optimistic concurrency.

    Only one transfer may run at a time; a second call while one is in flight
    raises SyncInProgress instead of relying on the caller to disable triggers.
    """

    def __init__(
        self,
        client: ContentStoreClient,
        store: CycleStore,
        cache: CacheRepository,
        config: Callable[[], RemoteConfig],
        *,
        settle_seconds: float = DEFAULT_SETTLE_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.time,
    ):
        self._client = client
        self._store = store
        self._cache = cache
        self._config = config
        self._settle_seconds = float(settle_seconds)
        self._sleep = sleep
        self._clock = clock
        self.state = SyncState.IDLE
        self.content_hash: Optional[str] = None
        self._lock = threading.Lock()

    @property
    def busy(self) -> bool:
        return self.state != SyncState.IDLE

    def adopt_hash(self, sha: Optional[str]) -> None:
        self.content_hash = sha or None

    def reset(self) -> None:
        self.content_hash = None

    @contextmanager
    def _transfer(self, state: SyncState) -> Iterator[RemoteConfig]:
        # Check-and-claim in one step: Flask serves requests on several threads.
        if not self._lock.acquire(blocking=False):
            raise SyncInProgress(f"{self.state.value} already running")
        try:
            config = self._config()
            if not config.has_credential:
                raise MissingCredential("ACCESS_TOKEN_REQUIRED")

            self.state = state
            yield config
            if self._settle_seconds > 0:
                self._sleep(self._settle_seconds)
        finally:
            self.state = SyncState.IDLE
            self._lock.release()

    def pull(self, stream_path: Optional[str] = None, *, stream_label: Optional[str] = None) -> Cycle:
        with self._transfer(SyncState.PULLING) as config:
            path = stream_path or config.path
            try:
                res = self._client.get_file(config, path)
            except requests.RequestException as e:
                logger.error(f"SYNC_PULL_ERROR {path}: {e}")
                raise SyncFailure(None, str(e)) from e

            if res.status_code in _NOT_FOUND_STATUSES:
                logger.warning(
                    f"[SYNC_FAIL] File '{path}' on branch '{config.branch}' unreachable (HTTP {res.status_code})."
                )
                raise RemoteReferenceInvalid(path, config.branch, res.status_code)
            if not _is_success(res.status_code):
                raise SyncFailure(res.status_code)

            try:
                payload = res.json()
                encoded, sha = payload["content"], payload["sha"]
            except (ValueError, KeyError, TypeError) as e:
                raise SyncFailure(res.status_code, "MALFORMED_RESPONSE") from e

            text = decode_content(encoded)
            cycle = parse_cycle(text)

            self._store.replace(cycle, stream_label=stream_label)
            self.content_hash = sha
            self._cache.set(SLOT_DATA, text)
            logger.info(f"DATA_PULL_SUCCESSFUL {path} sha={str(sha)[:7]} workers={len(cycle.workers)}")
            return cycle

    def push(self) -> str:
        with self._transfer(SyncState.PUSHING) as config:
            cycle = self._store.cycle
            if cycle is None:
                raise NoDataToPush("NO_DATA_TO_PUSH")

            content = encode_content(serialize_cycle(cycle))
            message = f"SYS_SYNC_{int(self._clock() * 1000)}"
            try:
                res = self._client.put_file(
                    config,
                    config.path,
                    content=content,
                    message=message,
                    sha=self.content_hash,
                )
            except requests.RequestException as e:
                logger.error(f"SYNC_PUSH_ERROR {config.path}: {e}")
                raise SyncFailure(None, str(e)) from e

            if not _is_success(res.status_code):
                logger.warning(f"Push of {config.path} rejected (HTTP {res.status_code}), held sha={self.content_hash}")
                raise PushConflict(res.status_code)

            try:
                new_sha = res.json()["content"]["sha"]
            except (ValueError, KeyError, TypeError) as e:
                raise SyncFailure(res.status_code, "MALFORMED_RESPONSE") from e

            self.content_hash = new_sha
            logger.info(f"REMOTE_STORAGE_UPDATED {config.path} sha={str(new_sha)[:7]}")
            return new_sha
