"""Tests for the course discussion board endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient

from tests.conftest import create_course, enroll, register


def _post(client: TestClient, course_id: str, user_id: str, title: str = "Field trip?"):
    return client.post(
        "/api/discussions",
        json={
            "course_id": course_id,
            "user_id": user_id,
            "title": title,
            "content": "Where to next?",
        },
    )


def test_thread_with_replies(client: TestClient) -> None:
    teacher = register(client, "Frizzle", "Teacher")
    arnold = register(client, "Arnold", "Student")
    course = create_course(client, teacher["id"], "Science")
    enroll(client, course["id"], arnold["id"])

    resp = _post(client, course["id"], arnold["id"])
    assert resp.status_code == 201
    post = resp.json()["data"]
    assert post["user_role"] == "Student"

    reply = client.post(
        f"/api/discussions/{post['id']}/reply",
        json={"user_id": teacher["id"], "content": "The ocean floor"},
    )
    assert reply.status_code == 200
    [r] = reply.json()["data"]["replies"]
    assert r["user_name"] == "Frizzle"
    assert r["content"] == "The ocean floor"

    listed = client.get(f"/api/courses/{course['id']}/discussions").json()["data"]
    assert len(listed) == 1
    assert len(listed[0]["replies"]) == 1


def test_outsider_cannot_post(client: TestClient) -> None:
    teacher = register(client, "Frizzle", "Teacher")
    outsider = register(client, "Phoebe", "Student")
    course = create_course(client, teacher["id"])
    resp = _post(client, course["id"], outsider["id"])
    assert resp.status_code == 403


def test_delete_rules(client: TestClient) -> None:
    teacher = register(client, "Frizzle", "Teacher")
    arnold = register(client, "Arnold", "Student")
    wanda = register(client, "Wanda", "Student")
    course = create_course(client, teacher["id"])
    enroll(client, course["id"], arnold["id"])
    enroll(client, course["id"], wanda["id"])
    post = _post(client, course["id"], arnold["id"]).json()["data"]

    denied = client.delete(f"/api/discussions/{post['id']}", params={"user_id": wanda["id"]})
    assert denied.status_code == 403

    ok = client.delete(f"/api/discussions/{post['id']}", params={"user_id": teacher["id"]})
    assert ok.status_code == 200
    assert client.get(f"/api/courses/{course['id']}/discussions").json()["data"] == []
