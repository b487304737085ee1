"""Course material endpoints.  file_url is an opaque link; no uploads here."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, status
from pydantic import BaseModel

from coursehub.api.dependencies import NotifierDep, StoreDep
from coursehub.api.schemas import DeletedOut, MaterialOut, Ok
from coursehub.services import material_service

router = APIRouter(prefix="/api", tags=["materials"])


class MaterialIn(BaseModel):
    course_id: UUID
    teacher_id: UUID
    title: str
    file_url: str
    file_type: str
    file_name: str
    description: str | None = None
    file_size: str | None = None


@router.post(
    "/materials", response_model=Ok[MaterialOut], status_code=status.HTTP_201_CREATED
)
async def create_material(
    payload: MaterialIn, store: StoreDep, notifier: NotifierDep
) -> Ok[MaterialOut]:
    material = await material_service.create_material(
        store,
        notifier,
        course_id=payload.course_id,
        teacher_id=payload.teacher_id,
        title=payload.title,
        file_url=payload.file_url,
        file_type=payload.file_type,
        file_name=payload.file_name,
        description=payload.description,
        file_size=payload.file_size,
    )
    return Ok(data=MaterialOut.model_validate(material))


@router.get("/courses/{course_id}/materials", response_model=Ok[list[MaterialOut]])
async def list_course_materials(
    course_id: UUID, store: StoreDep
) -> Ok[list[MaterialOut]]:
    items = await material_service.list_course_materials(store, course_id)
    return Ok(data=[MaterialOut.model_validate(m) for m in items])


@router.delete("/materials/{material_id}", response_model=Ok[DeletedOut])
async def delete_material(
    material_id: UUID, teacher_id: UUID, store: StoreDep
) -> Ok[DeletedOut]:
    await material_service.delete_material(store, material_id, teacher_id=teacher_id)
    return Ok(data=DeletedOut(id=material_id))
