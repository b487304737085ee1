"""Assignment endpoints."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, status
from pydantic import BaseModel

from coursehub.api.dependencies import NotifierDep, StoreDep
from coursehub.api.schemas import AssignmentOut, Ok
from coursehub.models.assignment import DEFAULT_MAX_POINTS
from coursehub.services import assignment_service

router = APIRouter(prefix="/api", tags=["assignments"])


class AssignmentIn(BaseModel):
    title: str
    description: str
    course_id: UUID
    teacher_id: UUID
    due_date: datetime
    max_points: int | None = DEFAULT_MAX_POINTS


class AssignmentDeletedOut(BaseModel):
    id: UUID
    submissions_removed: int


@router.post(
    "/assignments",
    response_model=Ok[AssignmentOut],
    status_code=status.HTTP_201_CREATED,
)
async def create_assignment(
    payload: AssignmentIn, store: StoreDep, notifier: NotifierDep
) -> Ok[AssignmentOut]:
    assignment = await assignment_service.create_assignment(
        store,
        notifier,
        title=payload.title,
        description=payload.description,
        course_id=payload.course_id,
        teacher_id=payload.teacher_id,
        due_date=payload.due_date,
        max_points=payload.max_points,
    )
    return Ok(data=AssignmentOut.model_validate(assignment))


@router.get("/courses/{course_id}/assignments", response_model=Ok[list[AssignmentOut]])
async def list_course_assignments(
    course_id: UUID, store: StoreDep
) -> Ok[list[AssignmentOut]]:
    items = await assignment_service.list_course_assignments(store, course_id)
    return Ok(data=[AssignmentOut.model_validate(a) for a in items])


@router.get(
    "/assignments/teacher/{teacher_id}", response_model=Ok[list[AssignmentOut]]
)
async def list_teacher_assignments(
    teacher_id: UUID, store: StoreDep
) -> Ok[list[AssignmentOut]]:
    items = await assignment_service.list_teacher_assignments(store, teacher_id)
    return Ok(data=[AssignmentOut.model_validate(a) for a in items])


@router.delete("/assignments/{assignment_id}", response_model=Ok[AssignmentDeletedOut])
async def delete_assignment(
    assignment_id: UUID, teacher_id: UUID, store: StoreDep
) -> Ok[AssignmentDeletedOut]:
    removed = await assignment_service.delete_assignment(
        store, assignment_id, teacher_id=teacher_id
    )
    return Ok(data=AssignmentDeletedOut(id=assignment_id, submissions_removed=removed))
