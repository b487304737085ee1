"""Notification fan-out and the per-user inbox.

Delivery is best effort.  A notifier never raises: whatever goes wrong
while persisting or enqueueing one notification is logged with its
traceback, counted in notification_failures_total, and dropped, so the
mutation that triggered it has already succeeded and stays that way.

Two notifiers share the Notifier protocol:

  InlineNotifier  writes the record straight to the store (one transaction
                  per recipient).
  QueuedNotifier  pushes a task onto the "notifications" queue; the worker
                  (python -m coursehub.worker) calls deliver() for it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from coursehub.core.config import SETTINGS
from coursehub.core.errors import NotFoundError
from coursehub.core.metrics import NOTIFICATION_FAILURES, NOTIFICATIONS_CREATED
from coursehub.models.notification import Notification, NotificationType
from coursehub.repos.notification_repo import NotificationRepo
from coursehub.services.task_queue import NOTIFICATIONS_QUEUE, TaskQueue

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    async def notify(
        self,
        user_id: UUID,
        type: NotificationType,
        title: str,
        message: str,
        link: str | None = None,
        related_id: UUID | None = None,
    ) -> None: ...


class InlineNotifier:
    def __init__(self, repo: NotificationRepo) -> None:
        self._repo = repo

    async def notify(
        self,
        user_id: UUID,
        type: NotificationType,
        title: str,
        message: str,
        link: str | None = None,
        related_id: UUID | None = None,
    ) -> None:
        try:
            await deliver(
                self._repo,
                {
                    "user_id": user_id,
                    "type": type,
                    "title": title,
                    "message": message,
                    "link": link,
                    "related_id": related_id,
                },
            )
        except Exception:
            NOTIFICATION_FAILURES.labels(type=type).inc()
            logger.exception("Notification dropped user=%s type=%s", user_id, type)


class QueuedNotifier:
    def __init__(self, queue: TaskQueue) -> None:
        self._queue = queue

    async def notify(
        self,
        user_id: UUID,
        type: NotificationType,
        title: str,
        message: str,
        link: str | None = None,
        related_id: UUID | None = None,
    ) -> None:
        payload = {
            "user_id": str(user_id),
            "type": type,
            "title": title,
            "message": message,
            "link": link,
            "related_id": str(related_id) if related_id is not None else None,
        }
        try:
            task = await self._queue.enqueue(NOTIFICATIONS_QUEUE, payload)
            logger.debug("Notification queued task=%s user=%s", task.id, user_id)
        except Exception:
            NOTIFICATION_FAILURES.labels(type=type).inc()
            logger.exception(
                "Notification enqueue failed user=%s type=%s", user_id, type
            )


async def deliver(repo: NotificationRepo, payload: dict) -> Notification:
    """Persist one notification described by a notify()/queue payload.

    Accepts ids as UUIDs or strings.  Raises on bad input or store failure;
    callers decide whether that is fatal.
    """
    related = payload.get("related_id")
    notification = Notification.new(
        user_id=_as_uuid(payload["user_id"]),
        type=payload["type"],
        title=payload["title"],
        message=payload["message"],
        link=payload.get("link"),
        related_id=_as_uuid(related) if related is not None else None,
    )
    await repo.add(notification)
    NOTIFICATIONS_CREATED.labels(type=notification.type).inc()
    return notification


def _as_uuid(value: UUID | str) -> UUID:
    return value if isinstance(value, UUID) else UUID(value)


async def notify_each(
    notifier: Notifier,
    recipients: list[UUID],
    type: NotificationType,
    title: str,
    message: str,
    link: str | None = None,
    related_id: UUID | None = None,
) -> None:
    """One independent notify() per recipient, in order."""
    for user_id in recipients:
        await notifier.notify(user_id, type, title, message, link, related_id)


# ---------------------------------------------------------------------------
# Inbox
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Inbox:
    notifications: list[Notification]
    unread_count: int  # across all of the user's notifications, not just this page


async def list_for_user(
    repo: NotificationRepo, user_id: UUID, limit: int | None = None
) -> Inbox:
    page = await repo.list_recent(
        user_id, limit if limit is not None else SETTINGS.notification_page_size
    )
    unread = await repo.count_unread(user_id)
    return Inbox(notifications=page, unread_count=unread)


async def mark_read(repo: NotificationRepo, notification_id: UUID) -> Notification:
    updated = await repo.mark_read(notification_id)
    if updated is None:
        raise NotFoundError("Notification not found")
    return updated


async def mark_all_read(repo: NotificationRepo, user_id: UUID) -> int:
    changed = await repo.mark_all_read(user_id)
    logger.info("Marked notifications read user=%s count=%d", user_id, changed)
    return changed


async def delete(repo: NotificationRepo, notification_id: UUID) -> None:
    # Deleting a missing notification is not an error.
    removed = await repo.delete(notification_id)
    if not removed:
        logger.debug("Delete of absent notification=%s", notification_id)
