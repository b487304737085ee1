"""Course discussion board endpoints."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, status
from pydantic import BaseModel

from coursehub.api.dependencies import NotifierDep, StoreDep
from coursehub.api.schemas import DeletedOut, DiscussionOut, Ok
from coursehub.services import discussion_service

router = APIRouter(prefix="/api", tags=["discussions"])


class DiscussionIn(BaseModel):
    course_id: UUID
    user_id: UUID
    title: str
    content: str


class ReplyIn(BaseModel):
    user_id: UUID
    content: str


@router.post(
    "/discussions",
    response_model=Ok[DiscussionOut],
    status_code=status.HTTP_201_CREATED,
)
async def create_post(
    payload: DiscussionIn, store: StoreDep, notifier: NotifierDep
) -> Ok[DiscussionOut]:
    discussion = await discussion_service.create_post(
        store,
        notifier,
        course_id=payload.course_id,
        user_id=payload.user_id,
        title=payload.title,
        content=payload.content,
    )
    return Ok(data=DiscussionOut.model_validate(discussion))


@router.get("/courses/{course_id}/discussions", response_model=Ok[list[DiscussionOut]])
async def list_course_discussions(
    course_id: UUID, store: StoreDep
) -> Ok[list[DiscussionOut]]:
    items = await discussion_service.list_course_discussions(store, course_id)
    return Ok(data=[DiscussionOut.model_validate(d) for d in items])


@router.post("/discussions/{discussion_id}/reply", response_model=Ok[DiscussionOut])
async def reply(
    discussion_id: UUID, payload: ReplyIn, store: StoreDep, notifier: NotifierDep
) -> Ok[DiscussionOut]:
    discussion = await discussion_service.reply(
        store,
        notifier,
        discussion_id,
        user_id=payload.user_id,
        content=payload.content,
    )
    return Ok(data=DiscussionOut.model_validate(discussion))


@router.delete("/discussions/{discussion_id}", response_model=Ok[DeletedOut])
async def delete_post(
    discussion_id: UUID, user_id: UUID, store: StoreDep
) -> Ok[DeletedOut]:
    await discussion_service.delete_post(store, discussion_id, user_id=user_id)
    return Ok(data=DeletedOut(id=discussion_id))
