from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4


@dataclass(frozen=True, slots=True)
class Enrollment:
    """One roster entry.  Owned by its Course; never stored on its own."""

    student_id: UUID
    student_name: str
    enrolled_at: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass(frozen=True, slots=True)
class Course:
    id: UUID
    title: str
    description: str
    duration: str
    teacher_id: UUID
    teacher_name: str
    roster: tuple[Enrollment, ...] = ()  # ordered by enrolled_at
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def student_ids(self) -> frozenset[UUID]:
        return frozenset(e.student_id for e in self.roster)

    @staticmethod
    def new(
        *,
        title: str,
        description: str,
        duration: str,
        teacher_id: UUID,
        teacher_name: str,
    ) -> Course:
        return Course(
            id=uuid4(),
            title=title.strip(),
            description=description,
            duration=duration,
            teacher_id=teacher_id,
            teacher_name=teacher_name,
        )
