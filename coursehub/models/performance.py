from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from coursehub.models.assignment import Submission


@dataclass(frozen=True, slots=True)
class PerformanceSummary:
    """Read model derived from graded submissions.

    average_grade is point-weighted: total_points / max_possible_points,
    as a percentage rounded to 2 places.  It is not the mean of
    per-assignment percentages.
    """

    graded_submissions: int
    total_points: float
    max_possible_points: int
    average_grade: float


@dataclass(frozen=True, slots=True)
class StudentPerformance:
    student_id: UUID
    course_id: UUID
    summary: PerformanceSummary
    submissions: tuple[Submission, ...] = ()


@dataclass(frozen=True, slots=True)
class RosterPerformance:
    student_id: UUID
    student_name: str
    total_assignments: int
    summary: PerformanceSummary


@dataclass(frozen=True, slots=True)
class CoursePerformance:
    course_id: UUID
    course_name: str
    students: tuple[RosterPerformance, ...]

    @property
    def student_count(self) -> int:
        return len(self.students)
