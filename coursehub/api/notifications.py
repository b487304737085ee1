"""Notification inbox endpoints.

No ownership checks: any caller who knows a notification id can mark or
delete it.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter
from pydantic import BaseModel

from coursehub.api.dependencies import StoreDep
from coursehub.api.schemas import DeletedOut, InboxOut, NotificationOut, Ok
from coursehub.services import notification_service

router = APIRouter(prefix="/api", tags=["notifications"])


class MarkedOut(BaseModel):
    updated: int


@router.get("/notifications/{user_id}", response_model=Ok[InboxOut])
async def list_notifications(user_id: UUID, store: StoreDep) -> Ok[InboxOut]:
    inbox = await notification_service.list_for_user(store.notifications, user_id)
    return Ok(data=InboxOut.model_validate(inbox))


@router.put("/notifications/{notification_id}/read", response_model=Ok[NotificationOut])
async def mark_read(notification_id: UUID, store: StoreDep) -> Ok[NotificationOut]:
    n = await notification_service.mark_read(store.notifications, notification_id)
    return Ok(data=NotificationOut.model_validate(n))


@router.put("/notifications/{user_id}/read-all", response_model=Ok[MarkedOut])
async def mark_all_read(user_id: UUID, store: StoreDep) -> Ok[MarkedOut]:
    changed = await notification_service.mark_all_read(store.notifications, user_id)
    return Ok(data=MarkedOut(updated=changed))


@router.delete("/notifications/{notification_id}", response_model=Ok[DeletedOut])
async def delete_notification(notification_id: UUID, store: StoreDep) -> Ok[DeletedOut]:
    await notification_service.delete(store.notifications, notification_id)
    return Ok(data=DeletedOut(id=notification_id))
