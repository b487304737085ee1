"""PostgreSQL implementation of NotificationRepo."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from coursehub.db.engine import session_scope
from coursehub.db.tables import NotificationRow
from coursehub.models.notification import Notification


class PgNotificationRepo:
    def __init__(self, sessions: async_sessionmaker[AsyncSession]) -> None:
        self._sessions = sessions

    async def get(self, notification_id: UUID) -> Notification | None:
        async with session_scope(self._sessions) as session:
            row = await session.get(NotificationRow, notification_id)
            return _row_to_notification(row) if row is not None else None

    async def add(self, notification: Notification) -> None:
        async with session_scope(self._sessions) as session:
            session.add(
                NotificationRow(
                    id=notification.id,
                    user_id=notification.user_id,
                    type=notification.type,
                    title=notification.title,
                    message=notification.message,
                    link=notification.link,
                    related_id=notification.related_id,
                    is_read=notification.is_read,
                    created_at=notification.created_at,
                )
            )

    async def list_recent(self, user_id: UUID, limit: int) -> list[Notification]:
        stmt = (
            select(NotificationRow)
            .where(NotificationRow.user_id == user_id)
            .order_by(NotificationRow.created_at.desc())
            .limit(limit)
        )
        async with session_scope(self._sessions) as session:
            rows = (await session.execute(stmt)).scalars().all()
            return [_row_to_notification(r) for r in rows]

    async def count_unread(self, user_id: UUID) -> int:
        stmt = select(func.count()).where(
            NotificationRow.user_id == user_id,
            NotificationRow.is_read.is_(False),
        )
        async with session_scope(self._sessions) as session:
            return (await session.execute(stmt)).scalar_one()

    async def mark_read(self, notification_id: UUID) -> Notification | None:
        stmt = (
            update(NotificationRow)
            .where(NotificationRow.id == notification_id)
            .values(is_read=True)
            .returning(NotificationRow)
        )
        async with session_scope(self._sessions) as session:
            row = (await session.execute(stmt)).scalar_one_or_none()
            return _row_to_notification(row) if row is not None else None

    async def mark_all_read(self, user_id: UUID) -> int:
        stmt = (
            update(NotificationRow)
            .where(
                NotificationRow.user_id == user_id,
                NotificationRow.is_read.is_(False),
            )
            .values(is_read=True)
        )
        async with session_scope(self._sessions) as session:
            result = await session.execute(stmt)
            return result.rowcount

    async def delete(self, notification_id: UUID) -> bool:
        stmt = delete(NotificationRow).where(NotificationRow.id == notification_id)
        async with session_scope(self._sessions) as session:
            result = await session.execute(stmt)
            return result.rowcount > 0


def _row_to_notification(row: NotificationRow) -> Notification:
    return Notification(
        id=row.id,
        user_id=row.user_id,
        type=row.type,  # type: ignore[arg-type]
        title=row.title,
        message=row.message,
        link=row.link,
        related_id=row.related_id,
        is_read=row.is_read,
        created_at=row.created_at,
    )
