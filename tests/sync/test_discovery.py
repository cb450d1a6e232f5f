import pytest
import requests

from src.roster_sync.roster_sync.core.exceptions import DiscoveryFailure
from src.roster_sync.roster_sync.sync.discovery import (
    FALLBACK_STREAMS,
    OFFLINE_STREAMS,
    is_stream_file,
    streams_from_listing,
)


@pytest.fixture
def discovery(make_container):
    return make_container().discovery


def test_stream_file_filter():
    assert is_stream_file("w5g-styczen.json")
    assert not is_stream_file("w5g.json")
    assert not is_stream_file("ustawienia.json")
    assert not is_stream_file("w5g-styczen.json.bak")


def test_streams_are_sorted_by_id():
    streams = streams_from_listing(["w5g-styczen.json", "index.html", "w5g-grudzien.json"])

    assert [(s.id, s.label, s.file) for s in streams] == [
        ("GRUDZIEN", "GRUDZIEN", "w5g-grudzien.json"),
        ("STYCZEN", "STYCZEN", "w5g-styczen.json"),
    ]


def test_discover_lists_remote_documents(discovery, session, http):
    session.on("GET", http.contents, http.listing("w5g.json", "w5g-luty.json", "w5g-grudzien.json", "README.md"))

    streams = discovery.discover()

    assert [s.file for s in streams] == ["w5g-grudzien.json", "w5g-luty.json"]
    assert "params" not in session.calls[0]


def test_discover_http_error_uses_offline_list(discovery, session, http):
    session.on("GET", http.contents, http.response(403, {"message": "rate limited"}))

    assert discovery.discover() == list(OFFLINE_STREAMS)


def test_discover_network_error_uses_fallback(discovery, session, http):
    session.on("GET", http.contents, requests.ConnectionError("offline"))

    assert discovery.discover() == list(FALLBACK_STREAMS)


def test_discover_malformed_listing_uses_fallback(discovery, session, http):
    session.on("GET", http.contents, http.response(200, {"message": "not a list"}))

    assert discovery.discover() == list(FALLBACK_STREAMS)


def test_fetch_raises_with_status(discovery, session, http):
    session.on("GET", http.contents, http.response(404, {}))

    with pytest.raises(DiscoveryFailure) as exc:
        discovery.fetch()
    assert exc.value.status == 404


def test_discover_without_matching_files_is_empty(discovery, session, http):
    session.on("GET", http.contents, http.listing("index.html"))

    assert discovery.discover() == []
