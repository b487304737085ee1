"""Courses, ownership and the roster.

is_owner / is_enrolled are the two access predicates the assignment,
discussion and material services build on.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from uuid import UUID

from coursehub.core.errors import (
    AuthError,
    ConflictError,
    DuplicateKeyError,
    NotFoundError,
    require_fields,
)
from coursehub.models.course import Course, Enrollment
from coursehub.repos.store import Store

logger = logging.getLogger(__name__)


def is_owner(course: Course, teacher_id: UUID) -> bool:
    return course.teacher_id == teacher_id


def is_enrolled(course: Course, student_id: UUID) -> bool:
    return student_id in course.student_ids


async def get_course(store: Store, course_id: UUID) -> Course:
    course = await store.courses.get(course_id)
    if course is None:
        raise NotFoundError("Course not found")
    return course


async def create_course(
    store: Store,
    *,
    title: str,
    description: str,
    duration: str,
    teacher_id: UUID,
    teacher_name: str | None = None,
) -> Course:
    require_fields(
        title=title, description=description, duration=duration, teacher_id=teacher_id
    )
    teacher = await store.users.get_by_id(teacher_id)
    if teacher is None or not teacher.is_teacher:
        logger.warning("Course create denied user=%s", teacher_id)
        raise AuthError("Only teachers can create courses")

    course = Course.new(
        title=title,
        description=description,
        duration=duration,
        teacher_id=teacher.id,
        teacher_name=(teacher_name or "").strip() or teacher.name,
    )
    await store.courses.add(course)
    logger.info("Created course=%s teacher=%s", course.id, teacher.id)
    return course


async def update_course(
    store: Store,
    course_id: UUID,
    *,
    teacher_id: UUID,
    title: str | None = None,
    description: str | None = None,
    duration: str | None = None,
) -> Course:
    course = await get_course(store, course_id)
    if not is_owner(course, teacher_id):
        logger.warning("Course update denied course=%s user=%s", course_id, teacher_id)
        raise AuthError("You can only update your own courses")

    updated = await store.courses.update_details(
        course_id,
        title=_keep(title, course.title),
        description=_keep(description, course.description),
        duration=_keep(duration, course.duration),
    )
    if updated is None:
        raise NotFoundError("Course not found")
    logger.info("Updated course=%s", course_id)
    return updated


def _keep(value: str | None, current: str) -> str:
    if value is None or not value.strip():
        return current
    return value.strip()


async def delete_course(store: Store, course_id: UUID, *, teacher_id: UUID) -> None:
    course = await get_course(store, course_id)
    if not is_owner(course, teacher_id):
        logger.warning("Course delete denied course=%s user=%s", course_id, teacher_id)
        raise AuthError("You can only delete your own courses")

    # Assignments, submissions, posts and materials are left behind.
    if not await store.courses.delete(course_id):
        raise NotFoundError("Course not found")
    logger.info("Deleted course=%s", course_id)


async def enroll(
    store: Store,
    course_id: UUID,
    *,
    student_id: UUID,
    student_name: str | None = None,
) -> Course:
    require_fields(student_id=student_id)
    course = await get_course(store, course_id)

    student = await store.users.get_by_id(student_id)
    if student is None or not student.is_student:
        logger.warning("Enroll denied course=%s user=%s", course_id, student_id)
        raise AuthError("Only students can enroll in courses")

    if is_enrolled(course, student_id):
        raise ConflictError("You are already enrolled in this course")

    entry = Enrollment(
        student_id=student.id,
        student_name=(student_name or "").strip() or student.name,
        enrolled_at=datetime.now(UTC),
    )
    try:
        updated = await store.courses.add_enrollment(course_id, entry)
    except DuplicateKeyError:
        raise ConflictError("You are already enrolled in this course") from None
    if updated is None:
        # Course deleted between the read and the write.
        raise NotFoundError("Course not found")

    logger.info("Enrolled student=%s course=%s", student_id, course_id)
    return updated


async def list_courses(store: Store) -> list[Course]:
    return await store.courses.list_all()


async def list_teacher_courses(store: Store, teacher_id: UUID) -> list[Course]:
    return await store.courses.list_by_teacher(teacher_id)


async def list_enrolled_courses(store: Store, student_id: UUID) -> list[Course]:
    return await store.courses.list_by_student(student_id)


async def list_roster(store: Store, course_id: UUID) -> list[Enrollment]:
    course = await get_course(store, course_id)
    return list(course.roster)
