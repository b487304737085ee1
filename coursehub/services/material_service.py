from __future__ import annotations

import logging
from uuid import UUID

from coursehub.core.errors import AuthError, NotFoundError, require_fields
from coursehub.models.material import Material
from coursehub.repos.store import Store
from coursehub.services import enrollment_service
from coursehub.services.notification_service import Notifier, notify_each

logger = logging.getLogger(__name__)


async def create_material(
    store: Store,
    notifier: Notifier,
    *,
    course_id: UUID,
    teacher_id: UUID,
    title: str,
    file_url: str,
    file_type: str,
    file_name: str,
    description: str | None = None,
    file_size: str | None = None,
) -> Material:
    require_fields(
        course_id=course_id,
        teacher_id=teacher_id,
        title=title,
        file_url=file_url,
        file_type=file_type,
        file_name=file_name,
    )
    course = await enrollment_service.get_course(store, course_id)
    if not enrollment_service.is_owner(course, teacher_id):
        logger.warning("Material upload denied course=%s user=%s", course_id, teacher_id)
        raise AuthError("You can only upload materials to your own courses")

    material = Material.new(
        course_id=course.id,
        course_name=course.title,
        teacher_id=teacher_id,
        teacher_name=course.teacher_name,
        title=title,
        file_url=file_url,
        file_type=file_type,
        file_name=file_name,
        description=description,
        file_size=file_size,
    )
    await store.materials.add(material)
    logger.info("Uploaded material=%s course=%s", material.id, course.id)

    await notify_each(
        notifier,
        [e.student_id for e in course.roster],
        "material",
        "New Course Material",
        f'{course.teacher_name} uploaded "{material.title}" in {course.title}',
        f"/course/{course.id}/materials",
        material.id,
    )
    return material


async def delete_material(store: Store, material_id: UUID, *, teacher_id: UUID) -> None:
    material = await store.materials.get(material_id)
    if material is None:
        raise NotFoundError("Material not found")
    if material.teacher_id != teacher_id:
        logger.warning("Material delete denied material=%s user=%s", material_id, teacher_id)
        raise AuthError("You can only delete your own materials")

    await store.materials.delete(material_id)
    logger.info("Deleted material=%s", material_id)


async def list_course_materials(store: Store, course_id: UUID) -> list[Material]:
    return await store.materials.list_by_course(course_id)
