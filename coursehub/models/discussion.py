from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4


@dataclass(frozen=True, slots=True)
class Reply:
    user_id: UUID
    user_name: str
    user_role: str
    content: str
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass(frozen=True, slots=True)
class Discussion:
    id: UUID
    course_id: UUID
    course_name: str
    user_id: UUID  # author
    user_name: str
    user_role: str
    title: str
    content: str
    replies: tuple[Reply, ...] = ()  # append-only
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @staticmethod
    def new(
        *,
        course_id: UUID,
        course_name: str,
        user_id: UUID,
        user_name: str,
        user_role: str,
        title: str,
        content: str,
    ) -> Discussion:
        return Discussion(
            id=uuid4(),
            course_id=course_id,
            course_name=course_name,
            user_id=user_id,
            user_name=user_name,
            user_role=user_role,
            title=title.strip(),
            content=content,
        )
