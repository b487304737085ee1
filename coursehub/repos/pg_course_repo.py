"""PostgreSQL implementation of CourseRepo.

The roster lives in course_enrollments, keyed by (course_id, student_id);
reads reassemble it into Course.roster ordered by enrolled_at.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from coursehub.db.engine import session_scope
from coursehub.db.tables import CourseEnrollmentRow, CourseRow
from coursehub.models.course import Course, Enrollment


class PgCourseRepo:
    """Satisfies the CourseRepo Protocol using PostgreSQL via SQLAlchemy."""

    def __init__(self, sessions: async_sessionmaker[AsyncSession]) -> None:
        self._sessions = sessions

    async def get(self, course_id: UUID) -> Course | None:
        async with session_scope(self._sessions) as session:
            row = await session.get(CourseRow, course_id)
            if row is None:
                return None
            courses = await _with_rosters(session, [row])
            return courses[0]

    async def add(self, course: Course) -> None:
        async with session_scope(self._sessions) as session:
            session.add(
                CourseRow(
                    id=course.id,
                    title=course.title,
                    description=course.description,
                    duration=course.duration,
                    teacher_id=course.teacher_id,
                    teacher_name=course.teacher_name,
                    created_at=course.created_at,
                )
            )
            for e in course.roster:
                session.add(_enrollment_row(course.id, e))

    async def update_details(
        self,
        course_id: UUID,
        *,
        title: str,
        description: str,
        duration: str,
    ) -> Course | None:
        stmt = (
            update(CourseRow)
            .where(CourseRow.id == course_id)
            .values(title=title, description=description, duration=duration)
        )
        async with session_scope(self._sessions) as session:
            result = await session.execute(stmt)
            if result.rowcount == 0:
                return None
        return await self.get(course_id)

    async def delete(self, course_id: UUID) -> bool:
        # course_enrollments rows go with it (ON DELETE CASCADE)
        stmt = delete(CourseRow).where(CourseRow.id == course_id)
        async with session_scope(self._sessions) as session:
            result = await session.execute(stmt)
            return result.rowcount > 0

    async def list_all(self) -> list[Course]:
        return await self._list(select(CourseRow))

    async def list_by_teacher(self, teacher_id: UUID) -> list[Course]:
        return await self._list(
            select(CourseRow).where(CourseRow.teacher_id == teacher_id)
        )

    async def list_by_student(self, student_id: UUID) -> list[Course]:
        enrolled = select(CourseEnrollmentRow.course_id).where(
            CourseEnrollmentRow.student_id == student_id
        )
        return await self._list(select(CourseRow).where(CourseRow.id.in_(enrolled)))

    async def add_enrollment(
        self, course_id: UUID, enrollment: Enrollment
    ) -> Course | None:
        async with session_scope(self._sessions) as session:
            if await session.get(CourseRow, course_id) is None:
                return None
            session.add(_enrollment_row(course_id, enrollment))
        return await self.get(course_id)

    async def _list(self, stmt) -> list[Course]:
        stmt = stmt.order_by(CourseRow.created_at.desc())
        async with session_scope(self._sessions) as session:
            rows = (await session.execute(stmt)).scalars().all()
            return await _with_rosters(session, rows)


async def _with_rosters(
    session: AsyncSession, rows: Sequence[CourseRow]
) -> list[Course]:
    if not rows:
        return []
    stmt = (
        select(CourseEnrollmentRow)
        .where(CourseEnrollmentRow.course_id.in_([r.id for r in rows]))
        .order_by(CourseEnrollmentRow.enrolled_at)
    )
    rosters: dict[UUID, list[Enrollment]] = defaultdict(list)
    for e in (await session.execute(stmt)).scalars().all():
        rosters[e.course_id].append(
            Enrollment(
                student_id=e.student_id,
                student_name=e.student_name,
                enrolled_at=e.enrolled_at,
            )
        )
    return [
        Course(
            id=r.id,
            title=r.title,
            description=r.description,
            duration=r.duration,
            teacher_id=r.teacher_id,
            teacher_name=r.teacher_name,
            roster=tuple(rosters.get(r.id, ())),
            created_at=r.created_at,
        )
        for r in rows
    ]


def _enrollment_row(course_id: UUID, e: Enrollment) -> CourseEnrollmentRow:
    return CourseEnrollmentRow(
        course_id=course_id,
        student_id=e.student_id,
        student_name=e.student_name,
        enrolled_at=e.enrolled_at,
    )
