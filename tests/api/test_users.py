"""Tests for registration, login and user maintenance endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient

from tests.conftest import register

# ---- 201: register ----


def test_register_returns_user_without_hash(client: TestClient) -> None:
    resp = client.post(
        "/api/register",
        json={
            "name": "Arnold",
            "email": "  Arnold@Example.com ",
            "password": "pw-12345",
            "role": "Student",
        },
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["ok"] is True
    user = body["data"]
    assert user["email"] == "arnold@example.com"
    assert user["role"] == "Student"
    assert "password_hash" not in user
    assert "password" not in user


# ---- 400 / 409: register rejected ----


def test_register_unknown_role(client: TestClient) -> None:
    resp = client.post(
        "/api/register",
        json={"name": "X", "email": "x@example.com", "password": "pw", "role": "Admin"},
    )
    assert resp.status_code == 400
    assert resp.json() == {
        "ok": False,
        "kind": "validation",
        "message": "Role must be Student or Teacher",
    }


def test_register_missing_field(client: TestClient) -> None:
    resp = client.post(
        "/api/register",
        json={"name": "X", "email": "x@example.com", "password": "", "role": "Student"},
    )
    assert resp.status_code == 400
    assert "password" in resp.json()["message"]


def test_register_duplicate_email_case_insensitive(client: TestClient) -> None:
    register(client, "Wanda", "Student")
    resp = client.post(
        "/api/register",
        json={
            "name": "Other Wanda",
            "email": "WANDA@example.com",
            "password": "pw-12345",
            "role": "Teacher",
        },
    )
    assert resp.status_code == 409
    assert resp.json()["kind"] == "conflict"


# ---- login ----


def test_login_success(client: TestClient) -> None:
    user = register(client, "Carlos", "Student", password="s3cret-pw")
    resp = client.post(
        "/api/login", json={"email": "Carlos@example.com", "password": "s3cret-pw"}
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["id"] == user["id"]


def test_login_wrong_password_and_unknown_email_look_the_same(client: TestClient) -> None:
    register(client, "Carlos", "Student", password="s3cret-pw")
    wrong = client.post(
        "/api/login", json={"email": "carlos@example.com", "password": "nope"}
    )
    unknown = client.post(
        "/api/login", json={"email": "nobody@example.com", "password": "nope"}
    )
    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json() == unknown.json()
    assert wrong.json()["kind"] == "auth"


# ---- list / delete ----


def test_list_and_delete_users(client: TestClient) -> None:
    a = register(client, "Arnold", "Student")
    register(client, "Frizzle", "Teacher")

    listed = client.get("/api/users").json()["data"]
    assert {u["name"] for u in listed} == {"Arnold", "Frizzle"}

    fetched = client.get(f"/api/users/{a['id']}")
    assert fetched.json()["data"]["name"] == "Arnold"

    resp = client.delete(f"/api/users/{a['id']}")
    assert resp.status_code == 200
    assert resp.json()["data"] == {"id": a["id"]}
    assert len(client.get("/api/users").json()["data"]) == 1

    again = client.delete(f"/api/users/{a['id']}")
    assert again.status_code == 404
    assert client.get(f"/api/users/{a['id']}").status_code == 404
