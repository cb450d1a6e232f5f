import base64
import json
import threading

import pytest
import requests

from src.roster_sync.roster_sync.core.constants import SLOT_DATA
from src.roster_sync.roster_sync.core.enums import SyncState
from src.roster_sync.roster_sync.core.exceptions import (
    MissingCredential,
    NoDataToPush,
    PushConflict,
    RemoteReferenceInvalid,
    SyncFailure,
    SyncInProgress,
)
from src.roster_sync.roster_sync.cycles.model import Cycle

STREAM = "w5g-grudzien.json"


@pytest.fixture
def container(make_container):
    return make_container()


@pytest.fixture
def stream_url(http):
    return http.contents + STREAM


def _uploaded(call):
    return json.loads(base64.b64decode(call["json"]["content"]).decode("utf-8"))


def test_pull_loads_cycle_hash_and_cache(container, session, stream_url, http, sample_doc, sleeps):
    session.on("GET", stream_url, http.file(sample_doc, "sha-1"))

    cycle = container.gateway.pull(STREAM, stream_label="GRUDZIEN")

    assert [w.id for w in cycle.workers] == ["3", "7", "11", "abc"]
    assert container.store.cycle is cycle
    assert container.gateway.content_hash == "sha-1"
    assert json.loads(container.cache.get(SLOT_DATA)) == sample_doc
    assert container.gateway.state == SyncState.IDLE
    assert sleeps == [3.0]

    call = session.calls[0]
    assert call["params"] == {"ref": "main"}
    assert call["headers"]["Authorization"] == "token ghp_test"


def test_pull_without_credential_sends_nothing(make_container, session):
    container = make_container(token="")

    with pytest.raises(MissingCredential):
        container.gateway.pull()
    assert session.calls == []
    assert container.gateway.state == SyncState.IDLE


@pytest.mark.parametrize("status", [404, 422])
def test_pull_missing_document_leaves_state_untouched(container, session, stream_url, http, status, sleeps):
    session.on("GET", stream_url, http.response(status, {"message": "Not Found"}))
    container.gateway.adopt_hash("held")

    with pytest.raises(RemoteReferenceInvalid) as exc:
        container.gateway.pull(STREAM)

    assert exc.value.status == status
    assert "main" in str(exc.value)
    assert container.store.cycle is None
    assert container.gateway.content_hash == "held"
    assert container.gateway.state == SyncState.IDLE
    assert sleeps == []


def test_pull_server_error(container, session, stream_url, http):
    session.on("GET", stream_url, http.response(500, {}))

    with pytest.raises(SyncFailure) as exc:
        container.gateway.pull(STREAM)
    assert exc.value.status == 500
    assert container.cache.get(SLOT_DATA) is None


def test_pull_network_error(container, session, stream_url):
    session.on("GET", stream_url, requests.ConnectionError("offline"))

    with pytest.raises(SyncFailure) as exc:
        container.gateway.pull(STREAM)
    assert exc.value.status is None
    assert container.gateway.state == SyncState.IDLE


def test_push_without_cycle(container):
    with pytest.raises(NoDataToPush):
        container.gateway.push()


def test_push_chains_content_hash(container, session, stream_url, http, sample_doc):
    session.on("GET", stream_url, http.file(sample_doc, "sha-1"))
    session.on("PUT", stream_url, http.put("sha-2"), http.put("sha-3"))
    gateway = container.gateway
    gateway.pull(STREAM)

    container.store.set_shift(1, 2, "x")
    assert gateway.push() == "sha-2"
    assert gateway.push() == "sha-3"

    first, second = session.calls[1], session.calls[2]
    assert first["json"]["sha"] == "sha-1"
    assert second["json"]["sha"] == "sha-2"
    assert first["json"]["branch"] == "main"
    assert first["json"]["message"].startswith("SYS_SYNC_")
    assert _uploaded(first)["workers"][1]["shifts"][2] == "X"
    assert gateway.content_hash == "sha-3"


def test_push_round_trips_the_document(container, session, stream_url, http, sample_doc):
    sample_doc["meta"]["generated"] = "2025-11-28"
    sample_doc["version"] = 3
    session.on("GET", stream_url, http.file(sample_doc, "sha-1"))
    session.on("PUT", stream_url, http.put("sha-2"))
    container.gateway.pull(STREAM)

    container.gateway.push()

    assert _uploaded(session.calls[-1]) == sample_doc


def test_push_conflict_keeps_held_hash_and_edits(container, session, stream_url, http, sample_doc):
    session.on("GET", stream_url, http.file(sample_doc, "sha-1"))
    session.on("PUT", stream_url, http.response(409, {"message": "sha mismatch"}))
    container.gateway.pull(STREAM)
    container.store.set_shift(0, 0, "U")

    with pytest.raises(PushConflict) as exc:
        container.gateway.push()

    assert exc.value.status == 409
    assert container.gateway.content_hash == "sha-1"
    assert container.store.cycle.workers[0].shifts[0] == "U"
    assert json.loads(container.cache.get(SLOT_DATA))["workers"][0]["shifts"][0] == "U"
    assert container.gateway.state == SyncState.IDLE


def test_push_without_held_hash_omits_precondition(container, session, stream_url, http, sample_doc):
    container.store.replace(Cycle.from_dict(sample_doc))
    session.on("PUT", stream_url, http.put("sha-new"))

    container.gateway.push()

    assert "sha" not in session.calls[-1]["json"]


def test_second_transfer_while_busy_is_rejected(container, session, stream_url, http, sample_doc):
    gateway = container.gateway
    seen = []

    def reentrant_get(url, **kwargs):
        with pytest.raises(SyncInProgress):
            gateway.push()
        seen.append(gateway.state)
        return http.file(sample_doc, "sha-1")

    session.get = reentrant_get

    gateway.pull(STREAM)

    assert seen == [SyncState.PULLING]
    assert gateway.state == SyncState.IDLE


def test_concurrent_pulls_from_two_threads_run_one_at_a_time(container, session, http, sample_doc):
    entered = threading.Event()
    release = threading.Event()
    outcomes = []

    def slow_get(url, **kwargs):
        entered.set()
        release.wait(5)
        return http.file(sample_doc, "sha-1")

    session.get = slow_get

    def run():
        try:
            container.gateway.pull(STREAM)
            outcomes.append("ok")
        except SyncInProgress:
            outcomes.append("refused")

    first = threading.Thread(target=run)
    first.start()
    assert entered.wait(5)

    second = threading.Thread(target=run)
    second.start()
    second.join(5)
    release.set()
    first.join(5)

    assert outcomes == ["refused", "ok"]
    assert container.gateway.state == SyncState.IDLE
