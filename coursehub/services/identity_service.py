from __future__ import annotations

import logging
from uuid import UUID

from argon2 import PasswordHasher
from argon2.exceptions import (
    HashingError,
    InvalidHash,
    VerificationError,
    VerifyMismatchError,
)

from coursehub.core.errors import (
    ConflictError,
    DuplicateKeyError,
    InternalError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
    require_fields,
)
from coursehub.models.user import ROLES, User, normalize_email
from coursehub.repos.store import Store

logger = logging.getLogger(__name__)

# Argon2 hash strings encode parameters + salt
_ph = PasswordHasher()


def hash_password(plain_password: str) -> str:
    if not plain_password:
        raise ValueError("password must be non-empty")
    try:
        return _ph.hash(plain_password)
    except HashingError:
        logger.exception("Password hashing failed")
        raise InternalError() from None


def verify_password(plain_password: str, password_hash: str) -> bool:
    if not plain_password or not password_hash:
        return False
    try:
        return _ph.verify(password_hash, plain_password)
    except (VerifyMismatchError, VerificationError, InvalidHash):
        return False


async def register(
    store: Store, *, name: str, email: str, password: str, role: str
) -> User:
    require_fields(name=name, email=email, password=password, role=role)
    if role not in ROLES:
        raise ValidationError("Role must be Student or Teacher")

    email = normalize_email(email)
    if await store.users.get_by_email(email) is not None:
        logger.warning("Rejected duplicate email=%s", email)
        raise ConflictError("User already exists with this email")

    user = User.new(
        name=name,
        email=email,
        password_hash=hash_password(password),
        role=role,  # type: ignore[arg-type]
    )
    try:
        await store.users.add(user)
    except DuplicateKeyError:
        # Lost a race with a concurrent registration for the same email.
        logger.warning("Rejected duplicate email=%s (store)", email)
        raise ConflictError("User already exists with this email") from None

    logger.info("Registered user=%s role=%s", user.id, user.role)
    return user


async def authenticate(store: Store, *, email: str, password: str) -> User:
    require_fields(email=email, password=password)
    user = await store.users.get_by_email(email)
    if user is None or not verify_password(password, user.password_hash):
        logger.warning("Login failed email=%s", normalize_email(email))
        raise InvalidCredentialsError()

    # Upgrade the stored hash if argon2 parameters changed since it was made.
    try:
        if _ph.check_needs_rehash(user.password_hash):
            await store.users.update_password_hash(user.id, hash_password(password))
            logger.info("Rehashed password for user=%s", user.id)
    except InvalidHash:
        raise InvalidCredentialsError() from None

    logger.info("Login ok user=%s", user.id)
    return user


async def get_user(store: Store, user_id: UUID) -> User:
    user = await store.users.get_by_id(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


async def list_users(store: Store) -> list[User]:
    return await store.users.list_all()


async def delete_user(store: Store, user_id: UUID) -> None:
    # Leaves the user's courses, submissions and posts in place.
    if not await store.users.delete(user_id):
        raise NotFoundError("User not found")
    logger.info("Deleted user=%s", user_id)
