"""Tests for course and enrollment endpoints."""

from __future__ import annotations

from uuid import uuid4

from fastapi.testclient import TestClient

from tests.conftest import create_course, enroll, register

# ---- 201: create ----


def test_create_course_snapshots_teacher_name(client: TestClient) -> None:
    teacher = register(client, "Frizzle", "Teacher")
    course = create_course(client, teacher["id"], "Science")
    assert course["title"] == "Science"
    assert course["teacher_id"] == teacher["id"]
    assert course["teacher_name"] == "Frizzle"
    assert course["roster"] == []


# ---- 403: role and ownership ----


def test_student_cannot_create_course(client: TestClient) -> None:
    student = register(client, "Arnold", "Student")
    resp = client.post(
        "/api/courses",
        json={
            "title": "Sneaky",
            "description": "d",
            "duration": "1 week",
            "teacher_id": student["id"],
        },
    )
    assert resp.status_code == 403
    assert resp.json()["kind"] == "auth"
    assert client.get("/api/courses").json()["data"] == []


def test_update_course_by_owner_keeps_blank_fields(client: TestClient) -> None:
    teacher = register(client, "Frizzle", "Teacher")
    course = create_course(client, teacher["id"], "Science")
    resp = client.put(
        f"/api/courses/{course['id']}",
        json={"teacher_id": teacher["id"], "title": "Science II", "duration": ""},
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["title"] == "Science II"
    assert data["duration"] == course["duration"]
    assert data["description"] == course["description"]


def test_update_course_by_other_teacher(client: TestClient) -> None:
    owner = register(client, "Frizzle", "Teacher")
    other = register(client, "Ratburn", "Teacher")
    course = create_course(client, owner["id"])
    resp = client.put(
        f"/api/courses/{course['id']}", json={"teacher_id": other["id"], "title": "Mine"}
    )
    assert resp.status_code == 403
    assert client.get(f"/api/courses/{course['id']}").json()["data"]["title"] == "Algebra I"


def test_delete_course(client: TestClient) -> None:
    teacher = register(client, "Frizzle", "Teacher")
    course = create_course(client, teacher["id"])

    other = register(client, "Ratburn", "Teacher")
    denied = client.delete(f"/api/courses/{course['id']}", params={"teacher_id": other["id"]})
    assert denied.status_code == 403

    resp = client.delete(f"/api/courses/{course['id']}", params={"teacher_id": teacher["id"]})
    assert resp.status_code == 200
    assert client.get(f"/api/courses/{course['id']}").status_code == 404


def test_get_missing_course(client: TestClient) -> None:
    resp = client.get(f"/api/courses/{uuid4()}")
    assert resp.status_code == 404
    assert resp.json() == {"ok": False, "kind": "not_found", "message": "Course not found"}


# ---- enrollment ----


def test_enroll_and_roster(client: TestClient) -> None:
    teacher = register(client, "Frizzle", "Teacher")
    arnold = register(client, "Arnold", "Student")
    wanda = register(client, "Wanda", "Student")
    course = create_course(client, teacher["id"])

    enroll(client, course["id"], arnold["id"])
    data = enroll(client, course["id"], wanda["id"])

    assert [e["student_name"] for e in data["roster"]] == ["Arnold", "Wanda"]
    roster = client.get(f"/api/courses/{course['id']}/students").json()["data"]
    assert [e["student_id"] for e in roster] == [arnold["id"], wanda["id"]]

    enrolled = client.get(f"/api/courses/student/{arnold['id']}/enrolled").json()["data"]
    assert [c["id"] for c in enrolled] == [course["id"]]


def test_enroll_twice_is_conflict(client: TestClient) -> None:
    teacher = register(client, "Frizzle", "Teacher")
    arnold = register(client, "Arnold", "Student")
    course = create_course(client, teacher["id"])
    enroll(client, course["id"], arnold["id"])

    resp = client.post(
        f"/api/courses/{course['id']}/enroll", json={"student_id": arnold["id"]}
    )
    assert resp.status_code == 409
    assert len(client.get(f"/api/courses/{course['id']}/students").json()["data"]) == 1


def test_teacher_cannot_enroll(client: TestClient) -> None:
    teacher = register(client, "Frizzle", "Teacher")
    course = create_course(client, teacher["id"])
    resp = client.post(
        f"/api/courses/{course['id']}/enroll", json={"student_id": teacher["id"]}
    )
    assert resp.status_code == 403


def test_enroll_missing_course(client: TestClient) -> None:
    arnold = register(client, "Arnold", "Student")
    resp = client.post(f"/api/courses/{uuid4()}/enroll", json={"student_id": arnold["id"]})
    assert resp.status_code == 404


def test_teacher_course_list(client: TestClient) -> None:
    frizzle = register(client, "Frizzle", "Teacher")
    ratburn = register(client, "Ratburn", "Teacher")
    mine = create_course(client, frizzle["id"], "Science")
    create_course(client, ratburn["id"], "Reading")

    listed = client.get(f"/api/courses/teacher/{frizzle['id']}").json()["data"]
    assert [c["id"] for c in listed] == [mine["id"]]
    assert len(client.get("/api/courses").json()["data"]) == 2
