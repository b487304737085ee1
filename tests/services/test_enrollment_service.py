from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from uuid import uuid4

import pytest

from coursehub.core.errors import (
    AuthError,
    ConflictError,
    DuplicateKeyError,
    NotFoundError,
    ValidationError,
)
from coursehub.models.course import Enrollment
from coursehub.repos.store import Store
from coursehub.services import (
    assignment_service,
    discussion_service,
    enrollment_service,
    material_service,
)
from tests.conftest import RecordingNotifier, seed_course, seed_enrollment, seed_user


def test_create_course_takes_teacher_name_from_store(store: Store) -> None:
    teacher = seed_user(store, "Ms Frizzle", "Teacher")
    course = seed_course(store, teacher)
    assert course.teacher_id == teacher.id
    assert course.teacher_name == "Ms Frizzle"
    assert course.roster == ()


def test_create_course_rejects_students(store: Store) -> None:
    student = seed_user(store, "Arnold", "Student")
    with pytest.raises(AuthError, match="Only teachers can create courses"):
        seed_course(store, student)


def test_create_course_rejects_unknown_user(store: Store) -> None:
    with pytest.raises(AuthError):
        asyncio.run(
            enrollment_service.create_course(
                store, title="X", description="Y", duration="Z", teacher_id=uuid4()
            )
        )


def test_create_course_requires_fields(store: Store) -> None:
    teacher = seed_user(store, "Ms Frizzle", "Teacher")
    with pytest.raises(ValidationError, match="duration"):
        asyncio.run(
            enrollment_service.create_course(
                store, title="X", description="Y", duration=" ", teacher_id=teacher.id
            )
        )


def test_enroll_appends_to_roster(store: Store) -> None:
    teacher = seed_user(store, "Ms Frizzle", "Teacher")
    student = seed_user(store, "Arnold", "Student")
    course = seed_course(store, teacher)

    updated = seed_enrollment(store, course, student)

    assert [e.student_id for e in updated.roster] == [student.id]
    assert updated.roster[0].student_name == "Arnold"
    assert enrollment_service.is_enrolled(updated, student.id)


def test_enroll_twice_is_conflict_and_roster_unchanged(store: Store) -> None:
    teacher = seed_user(store, "Ms Frizzle", "Teacher")
    student = seed_user(store, "Arnold", "Student")
    course = seed_course(store, teacher)
    seed_enrollment(store, course, student)

    with pytest.raises(ConflictError):
        seed_enrollment(store, course, student)

    roster = asyncio.run(enrollment_service.list_roster(store, course.id))
    assert len(roster) == 1


def test_store_rejects_duplicate_roster_entry(store: Store) -> None:
    teacher = seed_user(store, "Ms Frizzle", "Teacher")
    student = seed_user(store, "Arnold", "Student")
    course = seed_course(store, teacher)
    entry = Enrollment(student_id=student.id, student_name="Arnold")
    asyncio.run(store.courses.add_enrollment(course.id, entry))

    with pytest.raises(DuplicateKeyError):
        asyncio.run(store.courses.add_enrollment(course.id, entry))


def test_enroll_rejects_teachers(store: Store) -> None:
    teacher = seed_user(store, "Ms Frizzle", "Teacher")
    course = seed_course(store, teacher)
    with pytest.raises(AuthError, match="Only students"):
        seed_enrollment(store, course, teacher)


def test_enroll_missing_course(store: Store) -> None:
    student = seed_user(store, "Arnold", "Student")
    with pytest.raises(NotFoundError):
        asyncio.run(enrollment_service.enroll(store, uuid4(), student_id=student.id))


def test_update_course_keeps_blank_fields(store: Store) -> None:
    teacher = seed_user(store, "Ms Frizzle", "Teacher")
    course = seed_course(store, teacher)

    updated = asyncio.run(
        enrollment_service.update_course(
            store, course.id, teacher_id=teacher.id, title="Algebra II", duration="  "
        )
    )
    assert updated.title == "Algebra II"
    assert updated.duration == course.duration
    assert updated.description == course.description


def test_update_course_requires_owner(store: Store) -> None:
    teacher = seed_user(store, "Ms Frizzle", "Teacher")
    other = seed_user(store, "Mr Ratburn", "Teacher")
    course = seed_course(store, teacher)
    with pytest.raises(AuthError):
        asyncio.run(
            enrollment_service.update_course(store, course.id, teacher_id=other.id, title="X")
        )


def test_delete_course_requires_owner(store: Store) -> None:
    teacher = seed_user(store, "Ms Frizzle", "Teacher")
    other = seed_user(store, "Mr Ratburn", "Teacher")
    course = seed_course(store, teacher)

    with pytest.raises(AuthError):
        asyncio.run(enrollment_service.delete_course(store, course.id, teacher_id=other.id))

    asyncio.run(enrollment_service.delete_course(store, course.id, teacher_id=teacher.id))
    with pytest.raises(NotFoundError):
        asyncio.run(enrollment_service.get_course(store, course.id))


def test_delete_course_leaves_child_records_reachable(store: Store) -> None:
    teacher = seed_user(store, "Ms Frizzle", "Teacher")
    student = seed_user(store, "Arnold", "Student")
    course = seed_course(store, teacher, "Science")
    seed_enrollment(store, course, student)
    notifier = RecordingNotifier()

    assignment = asyncio.run(
        assignment_service.create_assignment(
            store,
            notifier,
            title="Lab report",
            description="d",
            course_id=course.id,
            teacher_id=teacher.id,
            due_date=datetime(2026, 11, 1, tzinfo=UTC),
        )
    )
    submission = asyncio.run(
        assignment_service.submit(
            store,
            notifier,
            assignment_id=assignment.id,
            student_id=student.id,
            course_id=course.id,
            content="answers",
        )
    )
    discussion = asyncio.run(
        discussion_service.create_post(
            store,
            notifier,
            course_id=course.id,
            user_id=student.id,
            title="Question",
            content="?",
        )
    )
    material = asyncio.run(
        material_service.create_material(
            store,
            notifier,
            course_id=course.id,
            teacher_id=teacher.id,
            title="Slides",
            file_url="https://files.example.com/s.pdf",
            file_type="application/pdf",
            file_name="s.pdf",
        )
    )

    asyncio.run(enrollment_service.delete_course(store, course.id, teacher_id=teacher.id))

    assert asyncio.run(store.courses.get(course.id)) is None
    assert asyncio.run(store.assignments.get(assignment.id)) == assignment
    assert asyncio.run(store.submissions.get(submission.id)) == submission
    assert asyncio.run(store.discussions.get(discussion.id)) == discussion
    assert asyncio.run(store.materials.get(material.id)) == material
    assert [a.id for a in asyncio.run(store.assignments.list_by_course(course.id))] == [
        assignment.id
    ]


def test_course_listings(store: Store) -> None:
    t1 = seed_user(store, "Ms Frizzle", "Teacher")
    t2 = seed_user(store, "Mr Ratburn", "Teacher")
    student = seed_user(store, "Arnold", "Student")
    c1 = seed_course(store, t1, "Biology")
    c2 = seed_course(store, t2, "Chemistry")
    seed_enrollment(store, c2, student)

    all_ids = {c.id for c in asyncio.run(enrollment_service.list_courses(store))}
    assert all_ids == {c1.id, c2.id}
    mine = asyncio.run(enrollment_service.list_teacher_courses(store, t1.id))
    assert [c.id for c in mine] == [c1.id]
    enrolled = asyncio.run(enrollment_service.list_enrolled_courses(store, student.id))
    assert [c.id for c in enrolled] == [c2.id]
