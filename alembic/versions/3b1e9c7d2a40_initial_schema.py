"""initial schema

Revision ID: 3b1e9c7d2a40
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3b1e9c7d2a40"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _uuid(name: str, **kw) -> sa.Column:
    return sa.Column(name, postgresql.UUID(as_uuid=True), **kw)


def _ts(name: str, nullable: bool = False) -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), nullable=nullable)


def upgrade() -> None:
    op.create_table(
        "users",
        _uuid("id", primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False, unique=True),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("role", sa.String(length=16), nullable=False),
        _ts("created_at"),
    )

    op.create_table(
        "courses",
        _uuid("id", primary_key=True),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("duration", sa.String(length=120), nullable=False),
        _uuid("teacher_id", nullable=False),
        sa.Column("teacher_name", sa.String(length=255), nullable=False),
        _ts("created_at"),
    )
    op.create_index("ix_courses_teacher_id", "courses", ["teacher_id"])

    op.create_table(
        "course_enrollments",
        _uuid("course_id", primary_key=True),
        _uuid("student_id", primary_key=True),
        sa.Column("student_name", sa.String(length=255), nullable=False),
        _ts("enrolled_at"),
        sa.ForeignKeyConstraint(["course_id"], ["courses.id"], ondelete="CASCADE"),
    )
    op.create_index(
        "ix_course_enrollments_student_id", "course_enrollments", ["student_id"]
    )

    op.create_table(
        "assignments",
        _uuid("id", primary_key=True),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        _uuid("course_id", nullable=False),
        sa.Column("course_name", sa.String(length=500), nullable=False),
        _uuid("teacher_id", nullable=False),
        _ts("due_date"),
        sa.Column("max_points", sa.Integer(), nullable=False),
        _ts("created_at"),
    )
    op.create_index("ix_assignments_course_id", "assignments", ["course_id"])
    op.create_index("ix_assignments_teacher_id", "assignments", ["teacher_id"])

    op.create_table(
        "submissions",
        _uuid("id", primary_key=True),
        _uuid("assignment_id", nullable=False),
        sa.Column("assignment_title", sa.String(length=500), nullable=False),
        _uuid("student_id", nullable=False),
        sa.Column("student_name", sa.String(length=255), nullable=False),
        _uuid("course_id", nullable=False),
        sa.Column("course_name", sa.String(length=500), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("file_url", sa.Text(), nullable=True),
        _ts("submitted_at"),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("grade", sa.Float(), nullable=True),
        sa.Column("feedback", sa.Text(), nullable=True),
        _ts("graded_at", nullable=True),
        sa.UniqueConstraint(
            "assignment_id", "student_id", name="uq_submissions_assignment_student"
        ),
    )
    op.create_index("ix_submissions_student_id", "submissions", ["student_id"])
    op.create_index(
        "ix_submissions_course_status", "submissions", ["course_id", "status"]
    )

    op.create_table(
        "discussions",
        _uuid("id", primary_key=True),
        _uuid("course_id", nullable=False),
        sa.Column("course_name", sa.String(length=500), nullable=False),
        _uuid("user_id", nullable=False),
        sa.Column("user_name", sa.String(length=255), nullable=False),
        sa.Column("user_role", sa.String(length=16), nullable=False),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        _ts("created_at"),
    )
    op.create_index("ix_discussions_course_id", "discussions", ["course_id"])

    op.create_table(
        "discussion_replies",
        _uuid("id", primary_key=True),
        _uuid("discussion_id", nullable=False),
        _uuid("user_id", nullable=False),
        sa.Column("user_name", sa.String(length=255), nullable=False),
        sa.Column("user_role", sa.String(length=16), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        _ts("created_at"),
        sa.ForeignKeyConstraint(
            ["discussion_id"], ["discussions.id"], ondelete="CASCADE"
        ),
    )
    op.create_index(
        "ix_discussion_replies_discussion_id", "discussion_replies", ["discussion_id"]
    )

    op.create_table(
        "materials",
        _uuid("id", primary_key=True),
        _uuid("course_id", nullable=False),
        sa.Column("course_name", sa.String(length=500), nullable=False),
        _uuid("teacher_id", nullable=False),
        sa.Column("teacher_name", sa.String(length=255), nullable=False),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("file_url", sa.Text(), nullable=False),
        sa.Column("file_type", sa.String(length=120), nullable=False),
        sa.Column("file_name", sa.String(length=500), nullable=False),
        sa.Column("file_size", sa.String(length=64), nullable=True),
        _ts("uploaded_at"),
    )
    op.create_index("ix_materials_course_id", "materials", ["course_id"])

    op.create_table(
        "notifications",
        _uuid("id", primary_key=True),
        _uuid("user_id", nullable=False),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("link", sa.Text(), nullable=True),
        _uuid("related_id", nullable=True),
        sa.Column(
            "is_read", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        _ts("created_at"),
    )
    op.create_index(
        "ix_notifications_user_created", "notifications", ["user_id", "created_at"]
    )


def downgrade() -> None:
    op.drop_table("notifications")
    op.drop_table("materials")
    op.drop_table("discussion_replies")
    op.drop_table("discussions")
    op.drop_table("submissions")
    op.drop_table("assignments")
    op.drop_table("course_enrollments")
    op.drop_table("courses")
    op.drop_table("users")
