from __future__ import annotations

from dataclasses import replace
from typing import Protocol
from uuid import UUID

from coursehub.core.errors import DuplicateKeyError
from coursehub.models.discussion import Discussion, Reply


class DiscussionRepo(Protocol):
    async def get(self, discussion_id: UUID) -> Discussion | None: ...
    async def add(self, discussion: Discussion) -> None: ...
    async def append_reply(
        self, discussion_id: UUID, reply: Reply
    ) -> Discussion | None: ...
    async def delete(self, discussion_id: UUID) -> bool: ...
    async def list_by_course(self, course_id: UUID) -> list[Discussion]: ...


class InMemoryDiscussionRepo:
    def __init__(self) -> None:
        self._by_id: dict[UUID, Discussion] = {}

    async def get(self, discussion_id: UUID) -> Discussion | None:
        return self._by_id.get(discussion_id)

    async def add(self, discussion: Discussion) -> None:
        if discussion.id in self._by_id:
            raise DuplicateKeyError("discussion already exists")
        self._by_id[discussion.id] = discussion

    async def append_reply(
        self, discussion_id: UUID, reply: Reply
    ) -> Discussion | None:
        d = self._by_id.get(discussion_id)
        if d is None:
            return None
        updated = replace(d, replies=(*d.replies, reply))
        self._by_id[discussion_id] = updated
        return updated

    async def delete(self, discussion_id: UUID) -> bool:
        return self._by_id.pop(discussion_id, None) is not None

    async def list_by_course(self, course_id: UUID) -> list[Discussion]:
        return sorted(
            (d for d in self._by_id.values() if d.course_id == course_id),
            key=lambda d: d.created_at,
            reverse=True,
        )
