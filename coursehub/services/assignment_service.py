"""Assignments, submissions and grading.

Every mutation checks access first, writes, and only then notifies.  A
notification failure is handled inside the notifier, so by the time one
could happen the write is already committed.
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
    ValidationError,
    require_fields,
)
from coursehub.models.assignment import DEFAULT_MAX_POINTS, Assignment, Submission
from coursehub.repos.store import Store
from coursehub.services import enrollment_service
from coursehub.services.notification_service import Notifier, notify_each

logger = logging.getLogger(__name__)


def format_grade(grade: float) -> str:
    """Render a grade as given: 90 -> "90", 87.12345 -> "87.12345"."""
    grade = float(grade)
    return str(int(grade)) if grade.is_integer() else repr(grade)


async def get_assignment(store: Store, assignment_id: UUID) -> Assignment:
    assignment = await store.assignments.get(assignment_id)
    if assignment is None:
        raise NotFoundError("Assignment not found")
    return assignment


async def create_assignment(
    store: Store,
    notifier: Notifier,
    *,
    title: str,
    description: str,
    course_id: UUID,
    teacher_id: UUID,
    due_date: datetime,
    max_points: int | None = DEFAULT_MAX_POINTS,
) -> Assignment:
    require_fields(
        title=title,
        description=description,
        course_id=course_id,
        teacher_id=teacher_id,
        due_date=due_date,
    )
    if max_points is None:
        max_points = DEFAULT_MAX_POINTS
    if max_points <= 0:
        raise ValidationError("max_points must be greater than 0")

    course = await enrollment_service.get_course(store, course_id)
    if not enrollment_service.is_owner(course, teacher_id):
        logger.warning("Assignment create denied course=%s user=%s", course_id, teacher_id)
        raise AuthError("You can only create assignments for your own courses")

    assignment = Assignment.new(
        title=title,
        description=description,
        course_id=course.id,
        course_name=course.title,
        teacher_id=teacher_id,
        due_date=due_date,
        max_points=max_points,
    )
    await store.assignments.add(assignment)
    logger.info(
        "Created assignment=%s course=%s recipients=%d",
        assignment.id,
        course.id,
        len(course.roster),
    )

    await notify_each(
        notifier,
        [e.student_id for e in course.roster],
        "assignment",
        "New Assignment Posted",
        f'New assignment "{assignment.title}" in {course.title}. '
        f"Due: {due_date:%Y-%m-%d}",
        f"/course/{course.id}/assignments",
        assignment.id,
    )
    return assignment


async def delete_assignment(
    store: Store, assignment_id: UUID, *, teacher_id: UUID
) -> int:
    """Delete an assignment and every submission for it.

    Returns the number of submissions removed.  Submissions go first; if
    the second delete fails the assignment survives with none left.
    """
    assignment = await get_assignment(store, assignment_id)
    if assignment.teacher_id != teacher_id:
        logger.warning(
            "Assignment delete denied assignment=%s user=%s", assignment_id, teacher_id
        )
        raise AuthError("You can only delete your own assignments")

    removed = await store.submissions.delete_by_assignment(assignment_id)
    await store.assignments.delete(assignment_id)
    logger.info("Deleted assignment=%s submissions=%d", assignment_id, removed)
    return removed


async def list_course_assignments(store: Store, course_id: UUID) -> list[Assignment]:
    return await store.assignments.list_by_course(course_id)


async def list_teacher_assignments(store: Store, teacher_id: UUID) -> list[Assignment]:
    return await store.assignments.list_by_teacher(teacher_id)


# ---------------------------------------------------------------------------
# Submissions
# ---------------------------------------------------------------------------


async def submit(
    store: Store,
    notifier: Notifier,
    *,
    assignment_id: UUID,
    student_id: UUID,
    course_id: UUID,
    content: str,
    file_url: str | None = None,
) -> Submission:
    require_fields(
        assignment_id=assignment_id,
        student_id=student_id,
        course_id=course_id,
        content=content,
    )
    course = await enrollment_service.get_course(store, course_id)
    if not enrollment_service.is_enrolled(course, student_id):
        logger.warning("Submit denied course=%s user=%s", course_id, student_id)
        raise AuthError("You must be enrolled in the course to submit assignments")
    student_name = next(
        e.student_name for e in course.roster if e.student_id == student_id
    )

    assignment = await get_assignment(store, assignment_id)
    if assignment.course_id != course.id:
        raise ValidationError("Assignment does not belong to this course")

    if await store.submissions.get_for_student(assignment_id, student_id) is not None:
        raise ConflictError("You have already submitted this assignment")

    submission = Submission.new(
        assignment_id=assignment.id,
        assignment_title=assignment.title,
        student_id=student_id,
        student_name=student_name,
        course_id=course.id,
        course_name=course.title,
        content=content,
        file_url=file_url or None,
    )
    try:
        await store.submissions.add(submission)
    except DuplicateKeyError:
        raise ConflictError("You have already submitted this assignment") from None
    logger.info(
        "Submission=%s assignment=%s student=%s", submission.id, assignment.id, student_id
    )

    await notifier.notify(
        assignment.teacher_id,
        "assignment",
        "New Assignment Submission",
        f'{student_name} submitted "{assignment.title}" in {course.title}',
        "/submissions",
        submission.id,
    )
    return submission


async def grade_submission(
    store: Store,
    notifier: Notifier,
    submission_id: UUID,
    *,
    grade: float | None,
    feedback: str | None,
    teacher_id: UUID,
) -> Submission:
    if grade is None:
        raise ValidationError("Grade is required")

    submission = await store.submissions.get(submission_id)
    if submission is None:
        raise NotFoundError("Submission not found")

    assignment = await store.assignments.get(submission.assignment_id)
    if assignment is None or assignment.teacher_id != teacher_id:
        logger.warning(
            "Grade denied submission=%s user=%s", submission_id, teacher_id
        )
        raise AuthError("You can only grade submissions for your own courses")

    if not 0 <= grade <= assignment.max_points:
        raise ValidationError(f"Grade must be between 0 and {assignment.max_points}")

    graded = await store.submissions.record_grade(
        submission_id,
        grade=grade,
        feedback=feedback or "",
        graded_at=datetime.now(UTC),
    )
    if graded is None:
        raise NotFoundError("Submission not found")
    logger.info("Graded submission=%s grade=%s", submission_id, grade)

    await notifier.notify(
        graded.student_id,
        "grade",
        "Assignment Graded",
        f'Your assignment "{graded.assignment_title}" has been graded: '
        f"{format_grade(grade)}/{assignment.max_points}",
        "/grades",
        graded.id,
    )
    return graded


async def list_assignment_submissions(
    store: Store, assignment_id: UUID
) -> list[Submission]:
    return await store.submissions.list_by_assignment(assignment_id)


async def list_student_submissions(
    store: Store, student_id: UUID, course_id: UUID | None = None
) -> list[Submission]:
    return await store.submissions.list_by_student(student_id, course_id)
