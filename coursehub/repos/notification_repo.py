from __future__ import annotations

from dataclasses import replace
from typing import Protocol
from uuid import UUID

from coursehub.core.errors import DuplicateKeyError
from coursehub.models.notification import Notification


class NotificationRepo(Protocol):
    async def get(self, notification_id: UUID) -> Notification | None: ...
    async def add(self, notification: Notification) -> None: ...
    async def list_recent(self, user_id: UUID, limit: int) -> list[Notification]: ...
    async def count_unread(self, user_id: UUID) -> int: ...
    async def mark_read(self, notification_id: UUID) -> Notification | None: ...
    async def mark_all_read(self, user_id: UUID) -> int: ...
    async def delete(self, notification_id: UUID) -> bool: ...


class InMemoryNotificationRepo:
    def __init__(self) -> None:
        # Insertion order is creation order.
        self._by_id: dict[UUID, Notification] = {}

    async def get(self, notification_id: UUID) -> Notification | None:
        return self._by_id.get(notification_id)

    async def add(self, notification: Notification) -> None:
        if notification.id in self._by_id:
            raise DuplicateKeyError("notification already exists")
        self._by_id[notification.id] = notification

    async def list_recent(self, user_id: UUID, limit: int) -> list[Notification]:
        # Reverse first so that equal timestamps still come out newest first
        # after the (stable) sort.
        mine = [n for n in reversed(self._by_id.values()) if n.user_id == user_id]
        mine.sort(key=lambda n: n.created_at, reverse=True)
        return mine[:limit]

    async def count_unread(self, user_id: UUID) -> int:
        return sum(
            1 for n in self._by_id.values() if n.user_id == user_id and not n.is_read
        )

    async def mark_read(self, notification_id: UUID) -> Notification | None:
        n = self._by_id.get(notification_id)
        if n is None:
            return None
        updated = replace(n, is_read=True)
        self._by_id[notification_id] = updated
        return updated

    async def mark_all_read(self, user_id: UUID) -> int:
        changed = 0
        for nid, n in self._by_id.items():
            if n.user_id == user_id and not n.is_read:
                self._by_id[nid] = replace(n, is_read=True)
                changed += 1
        return changed

    async def delete(self, notification_id: UUID) -> bool:
        return self._by_id.pop(notification_id, None) is not None
