from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Literal
from uuid import UUID, uuid4

Role = Literal["Student", "Teacher"]

ROLES: tuple[str, ...] = ("Student", "Teacher")


@dataclass(frozen=True, slots=True)
class User:
    id: UUID
    name: str
    email: str
    password_hash: str
    role: Role
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_teacher(self) -> bool:
        return self.role == "Teacher"

    @property
    def is_student(self) -> bool:
        return self.role == "Student"

    @staticmethod
    def new(*, name: str, email: str, password_hash: str, role: Role) -> User:
        # Email is normalized here so every store sees the same key.
        return User(
            id=uuid4(),
            name=name.strip(),
            email=normalize_email(email),
            password_hash=password_hash,
            role=role,
        )


def normalize_email(email: str) -> str:
    return email.strip().lower()
