"""Tests for course material endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient

from tests.conftest import create_course, register


def _material(course_id: str, teacher_id: str) -> dict:
    return {
        "course_id": course_id,
        "teacher_id": teacher_id,
        "title": "Week 1 slides",
        "file_url": "https://files.example.com/w1.pdf",
        "file_type": "application/pdf",
        "file_name": "w1.pdf",
    }


def test_upload_list_delete(client: TestClient) -> None:
    teacher = register(client, "Frizzle", "Teacher")
    course = create_course(client, teacher["id"], "Science")

    resp = client.post("/api/materials", json=_material(course["id"], teacher["id"]))
    assert resp.status_code == 201
    material = resp.json()["data"]
    assert material["teacher_name"] == "Frizzle"
    assert material["description"] is None

    listed = client.get(f"/api/courses/{course['id']}/materials").json()["data"]
    assert [m["id"] for m in listed] == [material["id"]]

    gone = client.delete(
        f"/api/materials/{material['id']}", params={"teacher_id": teacher["id"]}
    )
    assert gone.status_code == 200
    assert client.get(f"/api/courses/{course['id']}/materials").json()["data"] == []


def test_upload_by_other_teacher(client: TestClient) -> None:
    owner = register(client, "Frizzle", "Teacher")
    other = register(client, "Ratburn", "Teacher")
    course = create_course(client, owner["id"])
    resp = client.post("/api/materials", json=_material(course["id"], other["id"]))
    assert resp.status_code == 403


def test_delete_requires_teacher_id(client: TestClient) -> None:
    teacher = register(client, "Frizzle", "Teacher")
    course = create_course(client, teacher["id"])
    material = client.post(
        "/api/materials", json=_material(course["id"], teacher["id"])
    ).json()["data"]
    resp = client.delete(f"/api/materials/{material['id']}")
    assert resp.status_code == 400
    assert resp.json()["kind"] == "validation"
