from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Literal
from uuid import UUID, uuid4

SubmissionStatus = Literal["submitted", "graded"]

DEFAULT_MAX_POINTS = 100


@dataclass(frozen=True, slots=True)
class Assignment:
    id: UUID
    title: str
    description: str
    course_id: UUID
    course_name: str  # snapshot of Course.title at creation
    teacher_id: UUID
    due_date: datetime
    max_points: int = DEFAULT_MAX_POINTS
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @staticmethod
    def new(
        *,
        title: str,
        description: str,
        course_id: UUID,
        course_name: str,
        teacher_id: UUID,
        due_date: datetime,
        max_points: int = DEFAULT_MAX_POINTS,
    ) -> Assignment:
        return Assignment(
            id=uuid4(),
            title=title.strip(),
            description=description,
            course_id=course_id,
            course_name=course_name,
            teacher_id=teacher_id,
            due_date=due_date,
            max_points=max_points,
        )


@dataclass(frozen=True, slots=True)
class Submission:
    """A student's work for one assignment.

    State machine: submitted -> graded.  There is no way back; regrading
    only replaces grade/feedback/graded_at.
    """

    id: UUID
    assignment_id: UUID
    assignment_title: str
    student_id: UUID
    student_name: str
    course_id: UUID
    course_name: str
    content: str
    file_url: str | None = None
    submitted_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    status: SubmissionStatus = "submitted"
    grade: float | None = None
    feedback: str | None = None
    graded_at: datetime | None = None

    @property
    def is_graded(self) -> bool:
        return self.status == "graded"

    @staticmethod
    def new(
        *,
        assignment_id: UUID,
        assignment_title: str,
        student_id: UUID,
        student_name: str,
        course_id: UUID,
        course_name: str,
        content: str,
        file_url: str | None = None,
    ) -> Submission:
        return Submission(
            id=uuid4(),
            assignment_id=assignment_id,
            assignment_title=assignment_title,
            student_id=student_id,
            student_name=student_name,
            course_id=course_id,
            course_name=course_name,
            content=content,
            file_url=file_url,
        )
