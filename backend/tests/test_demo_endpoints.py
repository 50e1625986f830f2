from datetime import datetime

from fastapi.testclient import TestClient

from backend.devops_practice_app.api.endpoints import demo
from backend.devops_practice_app.main import app

client = TestClient(app)


def test_health_returns_exact_body():
    resp = client.get("/api/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "UP", "service": "devops-practice-app"}


def test_hello_returns_build_info():
    resp = client.get("/api/hello")

    assert resp.status_code == 200
    body = resp.json()
    assert set(body) == {"message", "timestamp", "version", "environment", "deployedBy"}
    assert body["message"] == "Hello from FastAPI on EKS!"
    assert body["version"] == "1.0.2"
    assert body["environment"] == "production"
    assert body["deployedBy"] == "GitHub Actions"
    assert isinstance(datetime.fromisoformat(body["timestamp"]), datetime)


def test_hello_timestamp_uses_local_clock(monkeypatch):
    monkeypatch.setattr(demo, "_now", lambda: datetime(2026, 10, 18, 9, 30, 5))

    body = client.get("/api/hello").json()

    assert body["timestamp"] == "2026-10-18T09:30:05.000000"


def test_successive_hello_calls_only_differ_in_timestamp():
    first = client.get("/api/hello").json()
    second = client.get("/api/hello").json()

    assert datetime.fromisoformat(first["timestamp"]) <= datetime.fromisoformat(
        second["timestamp"]
    )
    first.pop("timestamp")
    second.pop("timestamp")
    assert first == second


def test_query_string_is_ignored():
    plain = client.get("/api/health").json()
    with_query = client.get("/api/health", params={"verbose": "1"}).json()

    assert plain == with_query

    resp = client.get("/api/hello", params={"version": "9.9.9"})
    assert resp.json()["version"] == "1.0.2"


def test_unsupported_method_is_rejected_by_framework():
    resp = client.post("/api/health")

    assert resp.status_code == 405
