"""Response envelope and the outbound schemas shared across routers.

Every success body is ``{"ok": true, "data": ...}``; failures are rendered
by the exception handlers in coursehub.main as
``{"ok": false, "kind": ..., "message": ...}``.

Out-schemas read straight off the frozen domain dataclasses
(from_attributes), so a router returns ``Ok(data=CourseOut.model_validate(c))``.
Request bodies live next to the routes that accept them.
"""

from __future__ import annotations

from datetime import datetime
from typing import Generic, Literal, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class Ok(BaseModel, Generic[T]):
    ok: Literal[True] = True
    data: T


class ErrorOut(BaseModel):
    ok: Literal[False] = False
    kind: str
    message: str


class _FromDomain(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class DeletedOut(BaseModel):
    id: UUID


# --- identity --------------------------------------------------------------


class UserOut(_FromDomain):
    """A user without the password hash."""

    id: UUID
    name: str
    email: str
    role: str
    created_at: datetime


# --- courses ---------------------------------------------------------------


class EnrollmentOut(_FromDomain):
    student_id: UUID
    student_name: str
    enrolled_at: datetime


class CourseOut(_FromDomain):
    id: UUID
    title: str
    description: str
    duration: str
    teacher_id: UUID
    teacher_name: str
    roster: list[EnrollmentOut]
    created_at: datetime


# --- assignments / submissions --------------------------------------------


class AssignmentOut(_FromDomain):
    id: UUID
    title: str
    description: str
    course_id: UUID
    course_name: str
    teacher_id: UUID
    due_date: datetime
    max_points: int
    created_at: datetime


class SubmissionOut(_FromDomain):
    id: UUID
    assignment_id: UUID
    assignment_title: str
    student_id: UUID
    student_name: str
    course_id: UUID
    course_name: str
    content: str
    file_url: str | None
    submitted_at: datetime
    status: str
    grade: float | None
    feedback: str | None
    graded_at: datetime | None


class PerformanceOut(_FromDomain):
    graded_submissions: int
    total_points: float
    max_possible_points: int
    average_grade: float


class StudentPerformanceOut(_FromDomain):
    student_id: UUID
    course_id: UUID
    summary: PerformanceOut
    submissions: list[SubmissionOut]


class RosterPerformanceOut(_FromDomain):
    student_id: UUID
    student_name: str
    total_assignments: int
    summary: PerformanceOut


class CoursePerformanceOut(_FromDomain):
    course_id: UUID
    course_name: str
    student_count: int
    students: list[RosterPerformanceOut]


# --- discussions / materials / notifications ------------------------------


class ReplyOut(_FromDomain):
    user_id: UUID
    user_name: str
    user_role: str
    content: str
    created_at: datetime


class DiscussionOut(_FromDomain):
    id: UUID
    course_id: UUID
    course_name: str
    user_id: UUID
    user_name: str
    user_role: str
    title: str
    content: str
    replies: list[ReplyOut]
    created_at: datetime


class MaterialOut(_FromDomain):
    id: UUID
    course_id: UUID
    course_name: str
    teacher_id: UUID
    teacher_name: str
    title: str
    description: str | None
    file_url: str
    file_type: str
    file_name: str
    file_size: str | None
    uploaded_at: datetime


class NotificationOut(_FromDomain):
    id: UUID
    user_id: UUID
    type: str
    title: str
    message: str
    link: str | None
    related_id: UUID | None
    is_read: bool
    created_at: datetime


class InboxOut(_FromDomain):
    notifications: list[NotificationOut]
    unread_count: int
