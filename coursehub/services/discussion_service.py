from __future__ import annotations

import logging
from datetime import UTC, datetime
from uuid import UUID

from coursehub.core.errors import AuthError, NotFoundError, require_fields
from coursehub.models.course import Course
from coursehub.models.discussion import Discussion, Reply
from coursehub.models.user import User
from coursehub.repos.store import Store
from coursehub.services import enrollment_service
from coursehub.services.notification_service import Notifier, notify_each

logger = logging.getLogger(__name__)


async def _participant(store: Store, course: Course, user_id: UUID) -> User:
    """Return the user if they may post in the course, else raise AuthError.

    Students must be on the roster; teachers must own the course.
    """
    user = await store.users.get_by_id(user_id)
    if user is None:
        raise AuthError("Unknown user")
    if user.is_student and not enrollment_service.is_enrolled(course, user_id):
        logger.warning("Post denied course=%s user=%s (not enrolled)", course.id, user_id)
        raise AuthError("You must be enrolled in the course to post")
    if user.is_teacher and not enrollment_service.is_owner(course, user_id):
        logger.warning("Post denied course=%s user=%s (not owner)", course.id, user_id)
        raise AuthError("You can only post in your own courses")
    return user


async def get_discussion(store: Store, discussion_id: UUID) -> Discussion:
    discussion = await store.discussions.get(discussion_id)
    if discussion is None:
        raise NotFoundError("Discussion not found")
    return discussion


async def create_post(
    store: Store,
    notifier: Notifier,
    *,
    course_id: UUID,
    user_id: UUID,
    title: str,
    content: str,
) -> Discussion:
    require_fields(course_id=course_id, user_id=user_id, title=title, content=content)
    course = await enrollment_service.get_course(store, course_id)
    user = await _participant(store, course, user_id)

    discussion = Discussion.new(
        course_id=course.id,
        course_name=course.title,
        user_id=user.id,
        user_name=user.name,
        user_role=user.role,
        title=title,
        content=content,
    )
    await store.discussions.add(discussion)
    logger.info("Created discussion=%s course=%s", discussion.id, course.id)

    await notify_each(
        notifier,
        [e.student_id for e in course.roster if e.student_id != user.id],
        "discussion",
        "New Discussion Post",
        f'{user.name} posted "{discussion.title}" in {course.title}',
        f"/course/{course.id}/discussions",
        discussion.id,
    )
    return discussion


async def reply(
    store: Store,
    notifier: Notifier,
    discussion_id: UUID,
    *,
    user_id: UUID,
    content: str,
) -> Discussion:
    require_fields(user_id=user_id, content=content)
    discussion = await get_discussion(store, discussion_id)
    course = await store.courses.get(discussion.course_id)
    if course is None:
        raise NotFoundError("Course not found")
    user = await _participant(store, course, user_id)

    updated = await store.discussions.append_reply(
        discussion_id,
        Reply(
            user_id=user.id,
            user_name=user.name,
            user_role=user.role,
            content=content,
            created_at=datetime.now(UTC),
        ),
    )
    if updated is None:
        raise NotFoundError("Discussion not found")
    logger.info("Reply on discussion=%s user=%s", discussion_id, user.id)

    if discussion.user_id != user.id:
        await notifier.notify(
            discussion.user_id,
            "discussion",
            "New Reply to Your Post",
            f'{user.name} replied to "{discussion.title}"',
            f"/course/{discussion.course_id}/discussions",
            discussion.id,
        )
    return updated


async def delete_post(store: Store, discussion_id: UUID, *, user_id: UUID) -> None:
    discussion = await get_discussion(store, discussion_id)
    course = await store.courses.get(discussion.course_id)
    is_author = discussion.user_id == user_id
    is_teacher = course is not None and enrollment_service.is_owner(course, user_id)
    if not (is_author or is_teacher):
        logger.warning("Discussion delete denied discussion=%s user=%s", discussion_id, user_id)
        raise AuthError("You can only delete your own posts or posts in your course")

    await store.discussions.delete(discussion_id)
    logger.info("Deleted discussion=%s by=%s", discussion_id, user_id)


async def list_course_discussions(store: Store, course_id: UUID) -> list[Discussion]:
    return await store.discussions.list_by_course(course_id)
