from __future__ import annotations

from typing import Protocol
from uuid import UUID

from coursehub.core.errors import DuplicateKeyError
from coursehub.models.assignment import Assignment


class AssignmentRepo(Protocol):
    async def get(self, assignment_id: UUID) -> Assignment | None: ...
    async def add(self, assignment: Assignment) -> None: ...
    async def delete(self, assignment_id: UUID) -> bool: ...
    async def list_by_course(self, course_id: UUID) -> list[Assignment]: ...
    async def list_by_teacher(self, teacher_id: UUID) -> list[Assignment]: ...


class InMemoryAssignmentRepo:
    def __init__(self) -> None:
        self._by_id: dict[UUID, Assignment] = {}

    async def get(self, assignment_id: UUID) -> Assignment | None:
        return self._by_id.get(assignment_id)

    async def add(self, assignment: Assignment) -> None:
        if assignment.id in self._by_id:
            raise DuplicateKeyError("assignment already exists")
        self._by_id[assignment.id] = assignment

    async def delete(self, assignment_id: UUID) -> bool:
        return self._by_id.pop(assignment_id, None) is not None

    async def list_by_course(self, course_id: UUID) -> list[Assignment]:
        # Soonest due first
        return sorted(
            (a for a in self._by_id.values() if a.course_id == course_id),
            key=lambda a: a.due_date,
        )

    async def list_by_teacher(self, teacher_id: UUID) -> list[Assignment]:
        return sorted(
            (a for a in self._by_id.values() if a.teacher_id == teacher_id),
            key=lambda a: a.created_at,
            reverse=True,
        )
