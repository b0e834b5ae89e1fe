import importlib

from fastapi.testclient import TestClient

from api.dependencies import get_entity_store


def _import_app():
    # Import lazily so environment variables (if any) can be set before import.
    return importlib.import_module("api.main")


def _sample(body: str, prefix: str) -> float:
    for line in body.splitlines():
        if line.startswith(prefix):
            return float(line.rsplit(" ", 1)[1])
    return 0.0


def test_metrics_endpoint_exposes_prometheus_text() -> None:
    mod = _import_app()
    client = TestClient(mod.app)

    r = client.get("/metrics")
    assert r.status_code == 200
    assert "text/plain" in r.headers.get("content-type", "")
    body = r.text
    assert "smartnote_requests_total" in body
    assert "smartnote_tasks_imported_total" in body
    assert "smartnote_upstream_errors_total" in body


def test_create_tasks_increments_counters(store) -> None:
    mod = _import_app()
    mod.app.dependency_overrides[get_entity_store] = lambda: store
    client = TestClient(mod.app)
    try:
        before = client.get("/metrics").text
        r = client.post(
            "/ai/create-tasks",
            json={"tasks": [{"taskText": "Buy milk", "suggestedProject": "Home"}]},
            headers={"X-User-Id": "metrics-user"},
        )
        assert r.status_code == 201
        after = client.get("/metrics").text
    finally:
        mod.app.dependency_overrides.clear()

    assert _sample(after, "smartnote_tasks_imported_total ") == _sample(before, "smartnote_tasks_imported_total ") + 1
    created = 'smartnote_entities_auto_created_total{kind="project"} '
    assert _sample(after, created) == _sample(before, created) + 1
    assert 'smartnote_requests_total{endpoint="/ai/create-tasks",status="created"}' in after


def test_health_without_store_is_degraded() -> None:
    mod = _import_app()
    client = TestClient(mod.app)
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] in {"healthy", "degraded"}
