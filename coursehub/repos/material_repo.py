from __future__ import annotations

from typing import Protocol
from uuid import UUID

from coursehub.core.errors import DuplicateKeyError
from coursehub.models.material import Material


class MaterialRepo(Protocol):
    async def get(self, material_id: UUID) -> Material | None: ...
    async def add(self, material: Material) -> None: ...
    async def delete(self, material_id: UUID) -> bool: ...
    async def list_by_course(self, course_id: UUID) -> list[Material]: ...


class InMemoryMaterialRepo:
    def __init__(self) -> None:
        self._by_id: dict[UUID, Material] = {}

    async def get(self, material_id: UUID) -> Material | None:
        return self._by_id.get(material_id)

    async def add(self, material: Material) -> None:
        if material.id in self._by_id:
            raise DuplicateKeyError("material already exists")
        self._by_id[material.id] = material

    async def delete(self, material_id: UUID) -> bool:
        return self._by_id.pop(material_id, None) is not None

    async def list_by_course(self, course_id: UUID) -> list[Material]:
        return sorted(
            (m for m in self._by_id.values() if m.course_id == course_id),
            key=lambda m: m.uploaded_at,
            reverse=True,
        )
