"""PostgreSQL implementations of AssignmentRepo and SubmissionRepo."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from coursehub.db.engine import session_scope
from coursehub.db.tables import AssignmentRow, SubmissionRow
from coursehub.models.assignment import Assignment, Submission


class PgAssignmentRepo:
    def __init__(self, sessions: async_sessionmaker[AsyncSession]) -> None:
        self._sessions = sessions

    async def get(self, assignment_id: UUID) -> Assignment | None:
        async with session_scope(self._sessions) as session:
            row = await session.get(AssignmentRow, assignment_id)
            return _row_to_assignment(row) if row is not None else None

    async def add(self, assignment: Assignment) -> None:
        async with session_scope(self._sessions) as session:
            session.add(
                AssignmentRow(
                    id=assignment.id,
                    title=assignment.title,
                    description=assignment.description,
                    course_id=assignment.course_id,
                    course_name=assignment.course_name,
                    teacher_id=assignment.teacher_id,
                    due_date=assignment.due_date,
                    max_points=assignment.max_points,
                    created_at=assignment.created_at,
                )
            )

    async def delete(self, assignment_id: UUID) -> bool:
        stmt = delete(AssignmentRow).where(AssignmentRow.id == assignment_id)
        async with session_scope(self._sessions) as session:
            result = await session.execute(stmt)
            return result.rowcount > 0

    async def list_by_course(self, course_id: UUID) -> list[Assignment]:
        stmt = (
            select(AssignmentRow)
            .where(AssignmentRow.course_id == course_id)
            .order_by(AssignmentRow.due_date)
        )
        return await self._list(stmt)

    async def list_by_teacher(self, teacher_id: UUID) -> list[Assignment]:
        stmt = (
            select(AssignmentRow)
            .where(AssignmentRow.teacher_id == teacher_id)
            .order_by(AssignmentRow.created_at.desc())
        )
        return await self._list(stmt)

    async def _list(self, stmt) -> list[Assignment]:
        async with session_scope(self._sessions) as session:
            rows = (await session.execute(stmt)).scalars().all()
            return [_row_to_assignment(r) for r in rows]


class PgSubmissionRepo:
    """Relies on uq_submissions_assignment_student for one-per-student."""

    def __init__(self, sessions: async_sessionmaker[AsyncSession]) -> None:
        self._sessions = sessions

    async def get(self, submission_id: UUID) -> Submission | None:
        async with session_scope(self._sessions) as session:
            row = await session.get(SubmissionRow, submission_id)
            return _row_to_submission(row) if row is not None else None

    async def get_for_student(
        self, assignment_id: UUID, student_id: UUID
    ) -> Submission | None:
        stmt = select(SubmissionRow).where(
            SubmissionRow.assignment_id == assignment_id,
            SubmissionRow.student_id == student_id,
        )
        async with session_scope(self._sessions) as session:
            row = (await session.execute(stmt)).scalar_one_or_none()
            return _row_to_submission(row) if row is not None else None

    async def add(self, submission: Submission) -> None:
        async with session_scope(self._sessions) as session:
            session.add(
                SubmissionRow(
                    id=submission.id,
                    assignment_id=submission.assignment_id,
                    assignment_title=submission.assignment_title,
                    student_id=submission.student_id,
                    student_name=submission.student_name,
                    course_id=submission.course_id,
                    course_name=submission.course_name,
                    content=submission.content,
                    file_url=submission.file_url,
                    submitted_at=submission.submitted_at,
                    status=submission.status,
                    grade=submission.grade,
                    feedback=submission.feedback,
                    graded_at=submission.graded_at,
                )
            )

    async def record_grade(
        self,
        submission_id: UUID,
        *,
        grade: float,
        feedback: str,
        graded_at: datetime,
    ) -> Submission | None:
        stmt = (
            update(SubmissionRow)
            .where(SubmissionRow.id == submission_id)
            .values(grade=grade, feedback=feedback, graded_at=graded_at, status="graded")
            .returning(SubmissionRow)
        )
        async with session_scope(self._sessions) as session:
            row = (await session.execute(stmt)).scalar_one_or_none()
            return _row_to_submission(row) if row is not None else None

    async def delete_by_assignment(self, assignment_id: UUID) -> int:
        stmt = delete(SubmissionRow).where(SubmissionRow.assignment_id == assignment_id)
        async with session_scope(self._sessions) as session:
            result = await session.execute(stmt)
            return result.rowcount

    async def list_by_assignment(self, assignment_id: UUID) -> list[Submission]:
        stmt = select(SubmissionRow).where(
            SubmissionRow.assignment_id == assignment_id
        )
        return await self._list(stmt.order_by(SubmissionRow.submitted_at.desc()))

    async def list_by_student(
        self, student_id: UUID, course_id: UUID | None = None
    ) -> list[Submission]:
        stmt = select(SubmissionRow).where(SubmissionRow.student_id == student_id)
        if course_id is not None:
            stmt = stmt.where(SubmissionRow.course_id == course_id)
        return await self._list(stmt.order_by(SubmissionRow.submitted_at.desc()))

    async def list_graded(
        self, course_id: UUID, student_id: UUID | None = None
    ) -> list[Submission]:
        stmt = select(SubmissionRow).where(
            SubmissionRow.course_id == course_id,
            SubmissionRow.status == "graded",
        )
        if student_id is not None:
            stmt = stmt.where(SubmissionRow.student_id == student_id)
        return await self._list(stmt)

    async def _list(self, stmt) -> list[Submission]:
        async with session_scope(self._sessions) as session:
            rows = (await session.execute(stmt)).scalars().all()
            return [_row_to_submission(r) for r in rows]


def _row_to_assignment(row: AssignmentRow) -> Assignment:
    return Assignment(
        id=row.id,
        title=row.title,
        description=row.description,
        course_id=row.course_id,
        course_name=row.course_name,
        teacher_id=row.teacher_id,
        due_date=row.due_date,
        max_points=row.max_points,
        created_at=row.created_at,
    )


def _row_to_submission(row: SubmissionRow) -> Submission:
    return Submission(
        id=row.id,
        assignment_id=row.assignment_id,
        assignment_title=row.assignment_title,
        student_id=row.student_id,
        student_name=row.student_name,
        course_id=row.course_id,
        course_name=row.course_name,
        content=row.content,
        file_url=row.file_url,
        submitted_at=row.submitted_at,
        status=row.status,  # type: ignore[arg-type]
        grade=row.grade,
        feedback=row.feedback,
        graded_at=row.graded_at,
    )
