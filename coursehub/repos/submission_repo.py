from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Protocol
from uuid import UUID

from coursehub.core.errors import DuplicateKeyError
from coursehub.models.assignment import Submission


class SubmissionRepo(Protocol):
    async def get(self, submission_id: UUID) -> Submission | None: ...
    async def get_for_student(
        self, assignment_id: UUID, student_id: UUID
    ) -> Submission | None: ...
    async def add(self, submission: Submission) -> None: ...
    async def record_grade(
        self,
        submission_id: UUID,
        *,
        grade: float,
        feedback: str,
        graded_at: datetime,
    ) -> Submission | None: ...
    async def delete_by_assignment(self, assignment_id: UUID) -> int: ...
    async def list_by_assignment(self, assignment_id: UUID) -> list[Submission]: ...
    async def list_by_student(
        self, student_id: UUID, course_id: UUID | None = None
    ) -> list[Submission]: ...
    async def list_graded(
        self, course_id: UUID, student_id: UUID | None = None
    ) -> list[Submission]: ...


def _newest_first(subs) -> list[Submission]:
    return sorted(subs, key=lambda s: s.submitted_at, reverse=True)


class InMemorySubmissionRepo:
    """Submissions plus a unique (assignment_id, student_id) index.

    The index is the store-level constraint: two racing submits that both
    pass the service's pre-check still cannot both land.
    """

    def __init__(self) -> None:
        self._by_id: dict[UUID, Submission] = {}
        self._by_pair: dict[tuple[UUID, UUID], UUID] = {}

    async def get(self, submission_id: UUID) -> Submission | None:
        return self._by_id.get(submission_id)

    async def get_for_student(
        self, assignment_id: UUID, student_id: UUID
    ) -> Submission | None:
        sid = self._by_pair.get((assignment_id, student_id))
        return self._by_id.get(sid) if sid is not None else None

    async def add(self, submission: Submission) -> None:
        key = (submission.assignment_id, submission.student_id)
        if key in self._by_pair:
            raise DuplicateKeyError("submission already exists")
        self._by_pair[key] = submission.id
        self._by_id[submission.id] = submission

    async def record_grade(
        self,
        submission_id: UUID,
        *,
        grade: float,
        feedback: str,
        graded_at: datetime,
    ) -> Submission | None:
        s = self._by_id.get(submission_id)
        if s is None:
            return None
        updated = replace(
            s, grade=grade, feedback=feedback, graded_at=graded_at, status="graded"
        )
        self._by_id[submission_id] = updated
        return updated

    async def delete_by_assignment(self, assignment_id: UUID) -> int:
        doomed = [s for s in self._by_id.values() if s.assignment_id == assignment_id]
        for s in doomed:
            del self._by_id[s.id]
            self._by_pair.pop((s.assignment_id, s.student_id), None)
        return len(doomed)

    async def list_by_assignment(self, assignment_id: UUID) -> list[Submission]:
        return _newest_first(
            s for s in self._by_id.values() if s.assignment_id == assignment_id
        )

    async def list_by_student(
        self, student_id: UUID, course_id: UUID | None = None
    ) -> list[Submission]:
        return _newest_first(
            s
            for s in self._by_id.values()
            if s.student_id == student_id
            and (course_id is None or s.course_id == course_id)
        )

    async def list_graded(
        self, course_id: UUID, student_id: UUID | None = None
    ) -> list[Submission]:
        return [
            s
            for s in self._by_id.values()
            if s.course_id == course_id
            and s.is_graded
            and (student_id is None or s.student_id == student_id)
        ]
