"""Point-weighted grade aggregation.

average_grade = total_points / max_possible_points * 100, rounded to two
places; 0 when nothing is graded.  A submission whose assignment no
longer exists counts as out of DEFAULT_MAX_POINTS.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping
from uuid import UUID

from coursehub.models.assignment import DEFAULT_MAX_POINTS, Submission
from coursehub.models.performance import (
    CoursePerformance,
    PerformanceSummary,
    RosterPerformance,
    StudentPerformance,
)
from coursehub.repos.store import Store
from coursehub.services import enrollment_service


def summarize(
    graded: Iterable[Submission], max_points: Mapping[UUID, int]
) -> PerformanceSummary:
    count = 0
    total = 0.0
    possible = 0
    for s in graded:
        count += 1
        total += s.grade or 0
        possible += max_points.get(s.assignment_id, DEFAULT_MAX_POINTS)

    average = round(total / possible * 100, 2) if possible > 0 else 0.0
    return PerformanceSummary(
        graded_submissions=count,
        total_points=total,
        max_possible_points=possible,
        average_grade=average,
    )


async def _max_points_by_assignment(store: Store, course_id: UUID) -> dict[UUID, int]:
    return {a.id: a.max_points for a in await store.assignments.list_by_course(course_id)}


async def student_performance(
    store: Store, student_id: UUID, course_id: UUID
) -> StudentPerformance:
    graded = await store.submissions.list_graded(course_id, student_id)
    max_points = await _max_points_by_assignment(store, course_id) if graded else {}
    return StudentPerformance(
        student_id=student_id,
        course_id=course_id,
        summary=summarize(graded, max_points),
        submissions=tuple(graded),
    )


async def course_performance(store: Store, course_id: UUID) -> CoursePerformance:
    course = await enrollment_service.get_course(store, course_id)

    # Two reads for the whole roster, then group in memory.
    graded = await store.submissions.list_graded(course_id)
    max_points = await _max_points_by_assignment(store, course_id)

    by_student: dict[UUID, list[Submission]] = defaultdict(list)
    for s in graded:
        by_student[s.student_id].append(s)

    rows = tuple(
        RosterPerformance(
            student_id=e.student_id,
            student_name=e.student_name,
            total_assignments=len(max_points),
            summary=summarize(by_student.get(e.student_id, ()), max_points),
        )
        for e in course.roster
    )
    return CoursePerformance(course_id=course.id, course_name=course.title, students=rows)
