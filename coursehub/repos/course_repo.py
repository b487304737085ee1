from __future__ import annotations

from dataclasses import replace
from typing import Protocol
from uuid import UUID

from coursehub.core.errors import DuplicateKeyError
from coursehub.models.course import Course, Enrollment


class CourseRepo(Protocol):
    async def get(self, course_id: UUID) -> Course | None: ...
    async def add(self, course: Course) -> None: ...
    async def update_details(
        self,
        course_id: UUID,
        *,
        title: str,
        description: str,
        duration: str,
    ) -> Course | None: ...
    async def delete(self, course_id: UUID) -> bool: ...
    async def list_all(self) -> list[Course]: ...
    async def list_by_teacher(self, teacher_id: UUID) -> list[Course]: ...
    async def list_by_student(self, student_id: UUID) -> list[Course]: ...
    async def add_enrollment(
        self, course_id: UUID, enrollment: Enrollment
    ) -> Course | None: ...


def _newest_first(courses) -> list[Course]:
    return sorted(courses, key=lambda c: c.created_at, reverse=True)


class InMemoryCourseRepo:
    """Courses with their embedded roster.

    Roster membership is also kept in a (course_id, student_id) set, so the
    duplicate-enrollment check is a key lookup rather than a roster scan,
    and it is enforced here, at the store, not only by the service.
    """

    def __init__(self) -> None:
        self._by_id: dict[UUID, Course] = {}
        self._members: set[tuple[UUID, UUID]] = set()

    async def get(self, course_id: UUID) -> Course | None:
        return self._by_id.get(course_id)

    async def add(self, course: Course) -> None:
        if course.id in self._by_id:
            raise DuplicateKeyError("course already exists")
        self._by_id[course.id] = course
        for e in course.roster:
            self._members.add((course.id, e.student_id))

    async def update_details(
        self,
        course_id: UUID,
        *,
        title: str,
        description: str,
        duration: str,
    ) -> Course | None:
        c = self._by_id.get(course_id)
        if c is None:
            return None
        updated = replace(c, title=title, description=description, duration=duration)
        self._by_id[course_id] = updated
        return updated

    async def delete(self, course_id: UUID) -> bool:
        course = self._by_id.pop(course_id, None)
        if course is None:
            return False
        # The roster goes with its course; nothing else does.
        self._members = {m for m in self._members if m[0] != course_id}
        return True

    async def list_all(self) -> list[Course]:
        return _newest_first(self._by_id.values())

    async def list_by_teacher(self, teacher_id: UUID) -> list[Course]:
        return _newest_first(
            c for c in self._by_id.values() if c.teacher_id == teacher_id
        )

    async def list_by_student(self, student_id: UUID) -> list[Course]:
        return _newest_first(
            c for c in self._by_id.values() if (c.id, student_id) in self._members
        )

    async def add_enrollment(
        self, course_id: UUID, enrollment: Enrollment
    ) -> Course | None:
        c = self._by_id.get(course_id)
        if c is None:
            return None
        key = (course_id, enrollment.student_id)
        if key in self._members:
            raise DuplicateKeyError("student already enrolled")
        updated = replace(c, roster=(*c.roster, enrollment))
        self._members.add(key)
        self._by_id[course_id] = updated
        return updated
