from __future__ import annotations

import asyncio
import sys
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from uuid import UUID

import pytest
from fastapi.testclient import TestClient

from coursehub.api.dependencies import get_store
from coursehub.main import app
from coursehub.models.course import Course
from coursehub.models.user import Role, User
from coursehub.repos.store import Store, in_memory_store
from coursehub.services import enrollment_service
from coursehub.services.task_queue import task_queue

# Ensure repo root is on sys.path so `import coursehub` works under pytest.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture(autouse=True)
def store() -> Iterator[Store]:
    """A fresh in-memory store, wired into the app, for every test."""
    s = in_memory_store()
    app.dependency_overrides[get_store] = lambda: s
    yield s
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def reset_task_queue() -> None:
    """Clear task queues between tests."""
    if hasattr(task_queue, "_queues"):
        task_queue._queues.clear()  # type: ignore[union-attr]


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


# ---------------------------------------------------------------------------
# Seeding helpers (bypass argon2 so service tests stay fast)
# ---------------------------------------------------------------------------


def seed_user(store: Store, name: str, role: Role, email: str | None = None) -> User:
    user = User.new(
        name=name,
        email=email or f"{name.lower().replace(' ', '.')}@example.com",
        password_hash="not-a-real-hash",
        role=role,
    )
    asyncio.run(store.users.add(user))
    return user


def seed_course(store: Store, teacher: User, title: str = "Algebra I") -> Course:
    return asyncio.run(
        enrollment_service.create_course(
            store,
            title=title,
            description="Linear equations and friends",
            duration="12 weeks",
            teacher_id=teacher.id,
        )
    )


def seed_enrollment(store: Store, course: Course, student: User) -> Course:
    return asyncio.run(
        enrollment_service.enroll(store, course.id, student_id=student.id)
    )


@dataclass
class Sent:
    user_id: UUID
    type: str
    title: str
    message: str
    link: str | None
    related_id: UUID | None


@dataclass
class RecordingNotifier:
    """Notifier test double: remembers every notify() call."""

    sent: list[Sent] = field(default_factory=list)

    async def notify(self, user_id, type, title, message, link=None, related_id=None):
        self.sent.append(Sent(user_id, type, title, message, link, related_id))

    def to(self, user_id: UUID) -> list[Sent]:
        return [s for s in self.sent if s.user_id == user_id]


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


# ---------------------------------------------------------------------------
# HTTP helpers
# ---------------------------------------------------------------------------


def register(client: TestClient, name: str, role: str, password: str = "pw-12345") -> dict:
    resp = client.post(
        "/api/register",
        json={
            "name": name,
            "email": f"{name.lower()}@example.com",
            "password": password,
            "role": role,
        },
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


def create_course(client: TestClient, teacher_id: str, title: str = "Algebra I") -> dict:
    resp = client.post(
        "/api/courses",
        json={
            "title": title,
            "description": "Linear equations and friends",
            "duration": "12 weeks",
            "teacher_id": teacher_id,
        },
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


def enroll(client: TestClient, course_id: str, student_id: str) -> dict:
    resp = client.post(
        f"/api/courses/{course_id}/enroll", json={"student_id": student_id}
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


def create_assignment(
    client: TestClient,
    course_id: str,
    teacher_id: str,
    title: str = "Homework 1",
    max_points: int = 100,
) -> dict:
    resp = client.post(
        "/api/assignments",
        json={
            "title": title,
            "description": "Problems 1-10",
            "course_id": course_id,
            "teacher_id": teacher_id,
            "due_date": "2026-11-01T23:59:00Z",
            "max_points": max_points,
        },
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]
