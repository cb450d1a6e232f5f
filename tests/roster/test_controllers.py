import pytest

from src.roster_sync.roster_sync.main import create_app

STREAM = "w5g-grudzien.json"


@pytest.fixture
def container(make_container):
    return make_container()


@pytest.fixture
def client(container):
    app = create_app(settings_module="config.testing", container=container, bootstrap=False)
    return app.test_client()


@pytest.fixture
def loaded(client, session, http, sample_doc):
    session.on("GET", http.contents + STREAM, http.file(sample_doc, "sha-1"))
    res = client.post("/api/sync/pull")
    assert res.get_json()["ok"] is True
    return client


def test_views_need_a_loaded_cycle(client):
    for url in ("/api/dashboard", "/api/schedule", "/api/stats", "/api/operators/0"):
        res = client.get(url)
        assert res.status_code == 404
        assert res.get_json()["notice"]["message"] == "NO_DATA_LOADED"


def test_pull_then_dashboard(loaded):
    body = loaded.get("/api/dashboard").get_json()

    assert body["month"] == "LISTOPAD"
    assert body["buckets"][0]["count"] == 2


def test_status_never_exposes_the_token(loaded):
    body = loaded.get("/api/status").get_json()

    assert body["sha"] == "sha-1"
    assert body["state"] == "IDLE"
    assert "ghp_test" not in str(body)
    assert "ghp_test" not in str(loaded.get("/api/config").get_json())


def test_edit_shift_flow(loaded):
    res = loaded.post("/api/shifts", json={"worker_idx": 0, "day_idx": 1, "value": "u"})
    assert res.get_json()["notice"]["level"] == "warning"

    assert loaded.post("/api/lock").get_json()["locked"] is False
    res = loaded.post("/api/shifts", json={"worker_idx": 0, "day_idx": 1, "value": "u"})
    assert res.get_json()["notice"]["message"] == "SHIFT_UPDATED"

    profile = loaded.get("/api/operators/0").get_json()
    assert profile["code_counts"]["U"] == 1


def test_edit_shift_rejects_bad_payload(loaded):
    res = loaded.post("/api/shifts", json={"worker_idx": "first", "day_idx": 0})
    assert res.status_code == 400


def test_navigation(loaded):
    assert loaded.post("/api/navigation/day", json={"delta": 1}).get_json()["day_idx"] == 1
    assert loaded.post("/api/navigation/day", json={"delta": 9}).get_json()["moved"] is False

    res = loaded.post("/api/navigation/month", json={"delta": 1}).get_json()
    assert res["notice"]["message"] == "GRUDZIEN"
    assert res["day_idx"] == 2

    assert loaded.post("/api/navigation/jump", json={"idx": 0}).get_json()["day_idx"] == 0


def test_schedule_and_stats(loaded):
    schedule = loaded.get("/api/schedule").get_json()
    assert schedule["locked"] is True
    assert len(schedule["columns"]) == 4

    stats = loaded.get("/api/stats").get_json()
    assert stats == {"workers": 4, "days": 4, "total_hours": 96, "avg_hours": 24.0}


def test_operator_search(loaded):
    body = loaded.get("/api/operators?q=kow").get_json()
    assert [o["id"] for o in body] == ["3"]


def test_config_update(client):
    res = client.post("/api/config", json={"token": "ghp_new", "repo": "acme/rota"})

    assert res.get_json()["repo"] == "acme/rota"
    assert client.get("/api/config").get_json()["has_credential"] is True


def test_switch_stream_requires_path(client):
    assert client.post("/api/streams/switch", json={}).status_code == 400


def test_groups_endpoint(client):
    groups = client.get("/api/groups").get_json()
    assert [g["key"] for g in groups] == ["D", "S", "L", "K", "M", "Y"]

    res = client.post("/api/groups", json={"groups": "nope"})
    assert res.status_code == 400
