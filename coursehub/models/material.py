from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4


@dataclass(frozen=True, slots=True)
class Material:
    id: UUID
    course_id: UUID
    course_name: str
    teacher_id: UUID
    teacher_name: str
    title: str
    file_url: str  # opaque; the file itself lives elsewhere
    file_type: str
    file_name: str
    description: str | None = None
    file_size: str | None = None
    uploaded_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @staticmethod
    def new(
        *,
        course_id: UUID,
        course_name: str,
        teacher_id: UUID,
        teacher_name: str,
        title: str,
        file_url: str,
        file_type: str,
        file_name: str,
        description: str | None = None,
        file_size: str | None = None,
    ) -> Material:
        return Material(
            id=uuid4(),
            course_id=course_id,
            course_name=course_name,
            teacher_id=teacher_id,
            teacher_name=teacher_name,
            title=title.strip(),
            file_url=file_url,
            file_type=file_type,
            file_name=file_name,
            description=description,
            file_size=file_size,
        )
