"""Demo: walk one assignment from creation to grade using FastAPI TestClient.

Run with:
    python scripts/demo_course_flow.py

Uses the in-memory store unless DATABASE_URL is set.
"""

from __future__ import annotations

from uuid import uuid4

from fastapi.testclient import TestClient

from coursehub.main import app


def _data(resp) -> dict:
    body = resp.json()
    if not body.get("ok"):
        raise SystemExit(f"{resp.request.method} {resp.request.url} → {body}")
    return body["data"]


def main() -> None:
    client = TestClient(app)
    tag = uuid4().hex[:6]

    # ── Step 1: register a teacher and a student ───────────────────
    teacher = _data(
        client.post(
            "/api/register",
            json={
                "name": "Valerie Frizzle",
                "email": f"frizzle-{tag}@example.com",
                "password": "magic-bus",
                "role": "Teacher",
            },
        )
    )
    student = _data(
        client.post(
            "/api/register",
            json={
                "name": "Arnold Perlstein",
                "email": f"arnold-{tag}@example.com",
                "password": "field-trip",
                "role": "Student",
            },
        )
    )
    print(f"1. registered teacher={teacher['id']} student={student['id']}")

    # ── Step 2: course + enrollment ────────────────────────────────
    course = _data(
        client.post(
            "/api/courses",
            json={
                "title": "Science",
                "description": "Take chances, make mistakes, get messy",
                "duration": "1 term",
                "teacher_id": teacher["id"],
            },
        )
    )
    _data(
        client.post(
            f"/api/courses/{course['id']}/enroll", json={"student_id": student["id"]}
        )
    )
    print(f"2. course {course['title']!r} with 1 student")

    # ── Step 3: assignment → submission → grade ────────────────────
    assignment = _data(
        client.post(
            "/api/assignments",
            json={
                "title": "Inside the human body",
                "description": "Two pages",
                "course_id": course["id"],
                "teacher_id": teacher["id"],
                "due_date": "2026-11-01T23:59:00Z",
                "max_points": 50,
            },
        )
    )
    submission = _data(
        client.post(
            "/api/submissions",
            json={
                "assignment_id": assignment["id"],
                "student_id": student["id"],
                "course_id": course["id"],
                "content": "It was dark in there.",
            },
        )
    )
    graded = _data(
        client.put(
            f"/api/submissions/{submission['id']}/grade",
            json={"teacher_id": teacher["id"], "grade": 45, "feedback": "Vivid"},
        )
    )
    print(f"3. graded {graded['grade']}/{assignment['max_points']}")

    # ── Step 4: what the student sees ──────────────────────────────
    inbox = _data(client.get(f"/api/notifications/{student['id']}"))
    print(f"4. inbox unread={inbox['unread_count']}")
    for n in inbox["notifications"]:
        print(f"     [{n['type']}] {n['title']}: {n['message']}")

    perf = _data(
        client.get(f"/api/students/{student['id']}/course/{course['id']}/performance")
    )
    print(f"5. average_grade={perf['summary']['average_grade']}")


if __name__ == "__main__":
    main()
