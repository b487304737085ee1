"""Course and enrollment endpoints."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, status
from pydantic import BaseModel

from coursehub.api.dependencies import StoreDep
from coursehub.api.schemas import CourseOut, DeletedOut, EnrollmentOut, Ok
from coursehub.services import enrollment_service

router = APIRouter(prefix="/api", tags=["courses"])


class CourseIn(BaseModel):
    title: str
    description: str
    duration: str
    teacher_id: UUID
    teacher_name: str | None = None


class CourseUpdateIn(BaseModel):
    teacher_id: UUID
    title: str | None = None
    description: str | None = None
    duration: str | None = None


class EnrollIn(BaseModel):
    student_id: UUID
    student_name: str | None = None


@router.post(
    "/courses", response_model=Ok[CourseOut], status_code=status.HTTP_201_CREATED
)
async def create_course(payload: CourseIn, store: StoreDep) -> Ok[CourseOut]:
    course = await enrollment_service.create_course(
        store,
        title=payload.title,
        description=payload.description,
        duration=payload.duration,
        teacher_id=payload.teacher_id,
        teacher_name=payload.teacher_name,
    )
    return Ok(data=CourseOut.model_validate(course))


@router.get("/courses", response_model=Ok[list[CourseOut]])
async def list_courses(store: StoreDep) -> Ok[list[CourseOut]]:
    courses = await enrollment_service.list_courses(store)
    return Ok(data=[CourseOut.model_validate(c) for c in courses])


@router.get("/courses/teacher/{teacher_id}", response_model=Ok[list[CourseOut]])
async def list_teacher_courses(teacher_id: UUID, store: StoreDep) -> Ok[list[CourseOut]]:
    courses = await enrollment_service.list_teacher_courses(store, teacher_id)
    return Ok(data=[CourseOut.model_validate(c) for c in courses])


@router.get(
    "/courses/student/{student_id}/enrolled", response_model=Ok[list[CourseOut]]
)
async def list_enrolled_courses(
    student_id: UUID, store: StoreDep
) -> Ok[list[CourseOut]]:
    courses = await enrollment_service.list_enrolled_courses(store, student_id)
    return Ok(data=[CourseOut.model_validate(c) for c in courses])


@router.get("/courses/{course_id}", response_model=Ok[CourseOut])
async def get_course(course_id: UUID, store: StoreDep) -> Ok[CourseOut]:
    course = await enrollment_service.get_course(store, course_id)
    return Ok(data=CourseOut.model_validate(course))


@router.put("/courses/{course_id}", response_model=Ok[CourseOut])
async def update_course(
    course_id: UUID, payload: CourseUpdateIn, store: StoreDep
) -> Ok[CourseOut]:
    course = await enrollment_service.update_course(
        store,
        course_id,
        teacher_id=payload.teacher_id,
        title=payload.title,
        description=payload.description,
        duration=payload.duration,
    )
    return Ok(data=CourseOut.model_validate(course))


@router.delete("/courses/{course_id}", response_model=Ok[DeletedOut])
async def delete_course(
    course_id: UUID, teacher_id: UUID, store: StoreDep
) -> Ok[DeletedOut]:
    await enrollment_service.delete_course(store, course_id, teacher_id=teacher_id)
    return Ok(data=DeletedOut(id=course_id))


@router.post(
    "/courses/{course_id}/enroll",
    response_model=Ok[CourseOut],
    status_code=status.HTTP_201_CREATED,
)
async def enroll(course_id: UUID, payload: EnrollIn, store: StoreDep) -> Ok[CourseOut]:
    course = await enrollment_service.enroll(
        store,
        course_id,
        student_id=payload.student_id,
        student_name=payload.student_name,
    )
    return Ok(data=CourseOut.model_validate(course))


@router.get("/courses/{course_id}/students", response_model=Ok[list[EnrollmentOut]])
async def list_roster(course_id: UUID, store: StoreDep) -> Ok[list[EnrollmentOut]]:
    roster = await enrollment_service.list_roster(store, course_id)
    return Ok(data=[EnrollmentOut.model_validate(e) for e in roster])
