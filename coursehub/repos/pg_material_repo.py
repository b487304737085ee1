"""PostgreSQL implementation of MaterialRepo."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from coursehub.db.engine import session_scope
from coursehub.db.tables import MaterialRow
from coursehub.models.material import Material


class PgMaterialRepo:
    def __init__(self, sessions: async_sessionmaker[AsyncSession]) -> None:
        self._sessions = sessions

    async def get(self, material_id: UUID) -> Material | None:
        async with session_scope(self._sessions) as session:
            row = await session.get(MaterialRow, material_id)
            return _row_to_material(row) if row is not None else None

    async def add(self, material: Material) -> None:
        async with session_scope(self._sessions) as session:
            session.add(
                MaterialRow(
                    id=material.id,
                    course_id=material.course_id,
                    course_name=material.course_name,
                    teacher_id=material.teacher_id,
                    teacher_name=material.teacher_name,
                    title=material.title,
                    description=material.description,
                    file_url=material.file_url,
                    file_type=material.file_type,
                    file_name=material.file_name,
                    file_size=material.file_size,
                    uploaded_at=material.uploaded_at,
                )
            )

    async def delete(self, material_id: UUID) -> bool:
        stmt = delete(MaterialRow).where(MaterialRow.id == material_id)
        async with session_scope(self._sessions) as session:
            result = await session.execute(stmt)
            return result.rowcount > 0

    async def list_by_course(self, course_id: UUID) -> list[Material]:
        stmt = (
            select(MaterialRow)
            .where(MaterialRow.course_id == course_id)
            .order_by(MaterialRow.uploaded_at.desc())
        )
        async with session_scope(self._sessions) as session:
            rows = (await session.execute(stmt)).scalars().all()
            return [_row_to_material(r) for r in rows]


def _row_to_material(row: MaterialRow) -> Material:
    return Material(
        id=row.id,
        course_id=row.course_id,
        course_name=row.course_name,
        teacher_id=row.teacher_id,
        teacher_name=row.teacher_name,
        title=row.title,
        description=row.description,
        file_url=row.file_url,
        file_type=row.file_type,
        file_name=row.file_name,
        file_size=row.file_size,
        uploaded_at=row.uploaded_at,
    )
