"""Submission, grading and performance endpoints."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, status
from pydantic import BaseModel

from coursehub.api.dependencies import NotifierDep, StoreDep
from coursehub.api.schemas import (
    CoursePerformanceOut,
    Ok,
    StudentPerformanceOut,
    SubmissionOut,
)
from coursehub.services import assignment_service, performance_service

router = APIRouter(prefix="/api", tags=["submissions"])


class SubmissionIn(BaseModel):
    assignment_id: UUID
    student_id: UUID
    course_id: UUID
    content: str
    file_url: str | None = None


class GradeIn(BaseModel):
    teacher_id: UUID
    # Optional in the schema so a missing grade gets the domain message.
    grade: float | None = None
    feedback: str | None = None


@router.post(
    "/submissions",
    response_model=Ok[SubmissionOut],
    status_code=status.HTTP_201_CREATED,
)
async def submit(
    payload: SubmissionIn, store: StoreDep, notifier: NotifierDep
) -> Ok[SubmissionOut]:
    submission = await assignment_service.submit(
        store,
        notifier,
        assignment_id=payload.assignment_id,
        student_id=payload.student_id,
        course_id=payload.course_id,
        content=payload.content,
        file_url=payload.file_url,
    )
    return Ok(data=SubmissionOut.model_validate(submission))


@router.get(
    "/assignments/{assignment_id}/submissions", response_model=Ok[list[SubmissionOut]]
)
async def list_assignment_submissions(
    assignment_id: UUID, store: StoreDep
) -> Ok[list[SubmissionOut]]:
    items = await assignment_service.list_assignment_submissions(store, assignment_id)
    return Ok(data=[SubmissionOut.model_validate(s) for s in items])


@router.get(
    "/submissions/student/{student_id}", response_model=Ok[list[SubmissionOut]]
)
async def list_student_submissions(
    student_id: UUID, store: StoreDep
) -> Ok[list[SubmissionOut]]:
    items = await assignment_service.list_student_submissions(store, student_id)
    return Ok(data=[SubmissionOut.model_validate(s) for s in items])


@router.get(
    "/submissions/student/{student_id}/course/{course_id}",
    response_model=Ok[list[SubmissionOut]],
)
async def list_student_course_submissions(
    student_id: UUID, course_id: UUID, store: StoreDep
) -> Ok[list[SubmissionOut]]:
    items = await assignment_service.list_student_submissions(
        store, student_id, course_id
    )
    return Ok(data=[SubmissionOut.model_validate(s) for s in items])


@router.put("/submissions/{submission_id}/grade", response_model=Ok[SubmissionOut])
async def grade_submission(
    submission_id: UUID, payload: GradeIn, store: StoreDep, notifier: NotifierDep
) -> Ok[SubmissionOut]:
    graded = await assignment_service.grade_submission(
        store,
        notifier,
        submission_id,
        grade=payload.grade,
        feedback=payload.feedback,
        teacher_id=payload.teacher_id,
    )
    return Ok(data=SubmissionOut.model_validate(graded))


@router.get(
    "/students/{student_id}/course/{course_id}/performance",
    response_model=Ok[StudentPerformanceOut],
)
async def student_performance(
    student_id: UUID, course_id: UUID, store: StoreDep
) -> Ok[StudentPerformanceOut]:
    perf = await performance_service.student_performance(store, student_id, course_id)
    return Ok(data=StudentPerformanceOut.model_validate(perf))


@router.get(
    "/courses/{course_id}/performance", response_model=Ok[CoursePerformanceOut]
)
async def course_performance(
    course_id: UUID, store: StoreDep
) -> Ok[CoursePerformanceOut]:
    perf = await performance_service.course_performance(store, course_id)
    return Ok(data=CoursePerformanceOut.model_validate(perf))
