"""Repository bundle handed to every service call.

The API resolves one Store per process through get_store(); tests swap in a
fresh in_memory_store() per test via dependency_overrides.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from coursehub.repos.assignment_repo import AssignmentRepo, InMemoryAssignmentRepo
from coursehub.repos.course_repo import CourseRepo, InMemoryCourseRepo
from coursehub.repos.discussion_repo import DiscussionRepo, InMemoryDiscussionRepo
from coursehub.repos.material_repo import InMemoryMaterialRepo, MaterialRepo
from coursehub.repos.notification_repo import (
    InMemoryNotificationRepo,
    NotificationRepo,
)
from coursehub.repos.pg_assignment_repo import PgAssignmentRepo, PgSubmissionRepo
from coursehub.repos.pg_course_repo import PgCourseRepo
from coursehub.repos.pg_discussion_repo import PgDiscussionRepo
from coursehub.repos.pg_material_repo import PgMaterialRepo
from coursehub.repos.pg_notification_repo import PgNotificationRepo
from coursehub.repos.pg_user_repo import PgUserRepo
from coursehub.repos.submission_repo import InMemorySubmissionRepo, SubmissionRepo
from coursehub.repos.user_repo import InMemoryUserRepo, UserRepo


@dataclass(frozen=True, slots=True)
class Store:
    users: UserRepo
    courses: CourseRepo
    assignments: AssignmentRepo
    submissions: SubmissionRepo
    discussions: DiscussionRepo
    materials: MaterialRepo
    notifications: NotificationRepo


def in_memory_store() -> Store:
    return Store(
        users=InMemoryUserRepo(),
        courses=InMemoryCourseRepo(),
        assignments=InMemoryAssignmentRepo(),
        submissions=InMemorySubmissionRepo(),
        discussions=InMemoryDiscussionRepo(),
        materials=InMemoryMaterialRepo(),
        notifications=InMemoryNotificationRepo(),
    )


def pg_store(sessions: async_sessionmaker[AsyncSession]) -> Store:
    return Store(
        users=PgUserRepo(sessions),
        courses=PgCourseRepo(sessions),
        assignments=PgAssignmentRepo(sessions),
        submissions=PgSubmissionRepo(sessions),
        discussions=PgDiscussionRepo(sessions),
        materials=PgMaterialRepo(sessions),
        notifications=PgNotificationRepo(sessions),
    )
