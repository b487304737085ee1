from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Literal
from uuid import UUID, uuid4

NotificationType = Literal[
    "assignment", "grade", "material", "discussion", "enrollment", "general"
]

NOTIFICATION_TYPES: tuple[str, ...] = (
    "assignment",
    "grade",
    "material",
    "discussion",
    "enrollment",
    "general",
)


@dataclass(frozen=True, slots=True)
class Notification:
    id: UUID
    user_id: UUID  # recipient
    type: NotificationType
    title: str
    message: str
    link: str | None = None
    related_id: UUID | None = None
    is_read: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @staticmethod
    def new(
        *,
        user_id: UUID,
        type: NotificationType,
        title: str,
        message: str,
        link: str | None = None,
        related_id: UUID | None = None,
    ) -> Notification:
        if type not in NOTIFICATION_TYPES:
            raise ValueError(f"unknown notification type {type!r}")
        return Notification(
            id=uuid4(),
            user_id=user_id,
            type=type,
            title=title,
            message=message,
            link=link,
            related_id=related_id,
        )
