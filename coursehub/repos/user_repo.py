from __future__ import annotations

from dataclasses import replace
from typing import Protocol
from uuid import UUID

from coursehub.core.errors import DuplicateKeyError
from coursehub.models.user import User, normalize_email


class UserRepo(Protocol):
    async def get_by_id(self, user_id: UUID) -> User | None: ...
    async def get_by_email(self, email: str) -> User | None: ...
    async def add(self, user: User) -> None: ...
    async def list_all(self) -> list[User]: ...
    async def delete(self, user_id: UUID) -> bool: ...
    async def update_password_hash(self, user_id: UUID, password_hash: str) -> None: ...


class InMemoryUserRepo:
    def __init__(self) -> None:
        self._by_email: dict[str, User] = {}
        self._by_id: dict[UUID, User] = {}

    async def get_by_id(self, user_id: UUID) -> User | None:
        return self._by_id.get(user_id)

    async def get_by_email(self, email: str) -> User | None:
        return self._by_email.get(normalize_email(email))

    async def add(self, user: User) -> None:
        # The email index is the uniqueness constraint, same as the
        # unique index on users.email in Postgres.
        if user.email in self._by_email:
            raise DuplicateKeyError("email already exists")
        self._by_email[user.email] = user
        self._by_id[user.id] = user

    async def list_all(self) -> list[User]:
        return sorted(self._by_id.values(), key=lambda u: u.created_at)

    async def delete(self, user_id: UUID) -> bool:
        user = self._by_id.pop(user_id, None)
        if user is None:
            return False
        self._by_email.pop(user.email, None)
        return True

    async def update_password_hash(self, user_id: UUID, password_hash: str) -> None:
        u = self._by_id.get(user_id)
        if u is None:
            raise KeyError("user not found")

        updated = replace(u, password_hash=password_hash)
        self._by_id[user_id] = updated
        self._by_email[updated.email] = updated
