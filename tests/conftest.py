from __future__ import annotations

import base64
import copy
import json
from datetime import date
from types import SimpleNamespace
from typing import Any, Optional

import pytest

from src.roster_sync.roster_sync.cache.memory_cache import InMemoryCache
from src.roster_sync.roster_sync.container import build_container

API_URL = "https://api.github.test"
REPO_CONTENTS = f"{API_URL}/repos/skokivpr/w5g.github.io/contents/"

SAMPLE_DOC: dict[str, Any] = {
    "meta": {
        "days": [30, 31, 1, 2],
        "weekdays": ["PT", "SO", "ND", "PN"],
        "months": ["LISTOPAD", "GRUDZIEN"],
    },
    "workers": [
        {"id": "3", "name": "KOWALSKI", "shifts": ["1", "X", "P1", "2"]},
        {"id": "7", "name": "Nowak", "shifts": ["2", "n1", "", "U"]},
        {"id": "11", "name": "Wiśniewska", "shifts": ["NP1", "2", "S1", ""]},
        {"id": "abc", "name": "Gość", "shifts": ["", "P2", "ZW", "1"]},
    ],
}

REMOTE = {
    "api_url": API_URL,
    "token": "",
    "owner": "skokivpr",
    "repo": "w5g.github.io",
    "branch": "main",
    "path": "w5g-grudzien.json",
    "timeout": 1,
    "settle_seconds": 3,
}


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None):
        self.status_code = status_code
        self._payload = payload

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    """Stands in for requests.Session: canned responses per (method, url), calls recorded."""

    def __init__(self):
        self._routes: dict[tuple[str, str], list[Any]] = {}
        self.calls: list[dict[str, Any]] = []

    def on(self, method: str, url: str, *responses: Any) -> "FakeSession":
        self._routes.setdefault((method, url), []).extend(responses)
        return self

    def _dispatch(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        queue = self._routes.get((method, url))
        if not queue:
            return FakeResponse(404, {"message": "Not Found"})
        result = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(result, Exception):
            raise result
        return result

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        return self._dispatch("GET", url, **kwargs)

    def put(self, url: str, **kwargs: Any) -> FakeResponse:
        return self._dispatch("PUT", url, **kwargs)


def encode_doc(doc: Any) -> str:
    text = json.dumps(doc, indent=2, ensure_ascii=False)
    raw = base64.b64encode(text.encode("utf-8")).decode("ascii")
    # GitHub wraps base64 payloads every 60 characters
    return "\n".join(raw[i : i + 60] for i in range(0, len(raw), 60))


def file_response(doc: Any, sha: str) -> FakeResponse:
    return FakeResponse(200, {"content": encode_doc(doc), "sha": sha, "encoding": "base64"})


def put_response(sha: str) -> FakeResponse:
    return FakeResponse(200, {"content": {"sha": sha}, "commit": {"sha": "c" + sha}})


def listing_response(*names: str) -> FakeResponse:
    return FakeResponse(200, [{"name": n, "type": "file"} for n in names])


@pytest.fixture
def sample_doc() -> dict[str, Any]:
    return copy.deepcopy(SAMPLE_DOC)


@pytest.fixture
def cache() -> InMemoryCache:
    return InMemoryCache()


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def make_container(cache, session, sleeps):
    def _make(*, token: Optional[str] = "ghp_test", **overrides: Any):
        remote = {**REMOTE, "token": token or "", **overrides}
        return build_container(remote=remote, cache=cache, session=session, sleep=sleeps.append)

    return _make


@pytest.fixture
def fixed_today() -> date:
    return date(2025, 12, 1)


@pytest.fixture
def http() -> SimpleNamespace:
    """Response builders for FakeSession routes."""
    return SimpleNamespace(
        contents=REPO_CONTENTS,
        response=FakeResponse,
        file=file_response,
        put=put_response,
        listing=listing_response,
        encode=encode_doc,
    )
