"""Every error, whatever raised it, comes back in the same envelope."""

from __future__ import annotations

from fastapi.testclient import TestClient
from prometheus_client import REGISTRY

from coursehub.api.dependencies import get_store
from coursehub.main import app


def _errors(kind: str) -> float:
    return REGISTRY.get_sample_value("domain_errors_total", {"kind": kind}) or 0.0


def test_malformed_uuid_is_validation_error(client: TestClient) -> None:
    resp = client.get("/api/courses/not-a-uuid")
    assert resp.status_code == 400
    body = resp.json()
    assert body["ok"] is False
    assert body["kind"] == "validation"
    assert body["message"].startswith("path.course_id")


def test_missing_body_field_is_validation_error(client: TestClient) -> None:
    resp = client.post("/api/courses", json={"title": "No teacher"})
    assert resp.status_code == 400
    assert resp.json()["kind"] == "validation"


def test_domain_errors_are_counted(client: TestClient) -> None:
    before = _errors("not_found")
    client.get("/api/courses/00000000-0000-0000-0000-000000000000")
    assert _errors("not_found") == before + 1


def test_unexpected_exception_is_opaque_500() -> None:
    class ExplodingStore:
        @property
        def courses(self):
            raise RuntimeError("connection string with secrets")

    app.dependency_overrides[get_store] = lambda: ExplodingStore()
    client = TestClient(app, raise_server_exceptions=False)

    resp = client.get("/api/courses")

    assert resp.status_code == 500
    assert resp.json() == {
        "ok": False,
        "kind": "internal",
        "message": "Internal server error",
    }
