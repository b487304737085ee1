"""PostgreSQL implementation of DiscussionRepo.

Replies are rows in discussion_replies; appending one is a single INSERT,
so concurrent replies never overwrite each other.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence
from uuid import UUID, uuid4

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from coursehub.db.engine import session_scope
from coursehub.db.tables import DiscussionReplyRow, DiscussionRow
from coursehub.models.discussion import Discussion, Reply


class PgDiscussionRepo:
    def __init__(self, sessions: async_sessionmaker[AsyncSession]) -> None:
        self._sessions = sessions

    async def get(self, discussion_id: UUID) -> Discussion | None:
        async with session_scope(self._sessions) as session:
            row = await session.get(DiscussionRow, discussion_id)
            if row is None:
                return None
            return (await _with_replies(session, [row]))[0]

    async def add(self, discussion: Discussion) -> None:
        async with session_scope(self._sessions) as session:
            session.add(
                DiscussionRow(
                    id=discussion.id,
                    course_id=discussion.course_id,
                    course_name=discussion.course_name,
                    user_id=discussion.user_id,
                    user_name=discussion.user_name,
                    user_role=discussion.user_role,
                    title=discussion.title,
                    content=discussion.content,
                    created_at=discussion.created_at,
                )
            )
            for r in discussion.replies:
                session.add(_reply_row(discussion.id, r))

    async def append_reply(
        self, discussion_id: UUID, reply: Reply
    ) -> Discussion | None:
        async with session_scope(self._sessions) as session:
            if await session.get(DiscussionRow, discussion_id) is None:
                return None
            session.add(_reply_row(discussion_id, reply))
        return await self.get(discussion_id)

    async def delete(self, discussion_id: UUID) -> bool:
        stmt = delete(DiscussionRow).where(DiscussionRow.id == discussion_id)
        async with session_scope(self._sessions) as session:
            result = await session.execute(stmt)
            return result.rowcount > 0

    async def list_by_course(self, course_id: UUID) -> list[Discussion]:
        stmt = (
            select(DiscussionRow)
            .where(DiscussionRow.course_id == course_id)
            .order_by(DiscussionRow.created_at.desc())
        )
        async with session_scope(self._sessions) as session:
            rows = (await session.execute(stmt)).scalars().all()
            return await _with_replies(session, rows)


async def _with_replies(
    session: AsyncSession, rows: Sequence[DiscussionRow]
) -> list[Discussion]:
    if not rows:
        return []
    stmt = (
        select(DiscussionReplyRow)
        .where(DiscussionReplyRow.discussion_id.in_([r.id for r in rows]))
        .order_by(DiscussionReplyRow.created_at)
    )
    replies: dict[UUID, list[Reply]] = defaultdict(list)
    for r in (await session.execute(stmt)).scalars().all():
        replies[r.discussion_id].append(
            Reply(
                user_id=r.user_id,
                user_name=r.user_name,
                user_role=r.user_role,
                content=r.content,
                created_at=r.created_at,
            )
        )
    return [
        Discussion(
            id=d.id,
            course_id=d.course_id,
            course_name=d.course_name,
            user_id=d.user_id,
            user_name=d.user_name,
            user_role=d.user_role,
            title=d.title,
            content=d.content,
            replies=tuple(replies.get(d.id, ())),
            created_at=d.created_at,
        )
        for d in rows
    ]


def _reply_row(discussion_id: UUID, r: Reply) -> DiscussionReplyRow:
    return DiscussionReplyRow(
        id=uuid4(),
        discussion_id=discussion_id,
        user_id=r.user_id,
        user_name=r.user_name,
        user_role=r.user_role,
        content=r.content,
        created_at=r.created_at,
    )
