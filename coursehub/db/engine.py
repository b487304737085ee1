"""Async SQLAlchemy engine and session factory.

When DATABASE_URL is configured, provides:
- async engine for PostgreSQL via asyncpg
- async session factory
- session_scope(): one short transaction per repository call
- FastAPI lifespan hook for startup/shutdown

When DATABASE_URL is None, engine and factory are None and the app runs on
in-memory repositories.

Each repository call opens and commits its own transaction.  A request that
creates an assignment and then notifies twenty students performs twenty-one
independent commits, so a failed notification insert can never roll back
the assignment.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from coursehub.core.config import SETTINGS
from coursehub.core.errors import DuplicateKeyError, InternalError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for all table models."""


# --- Engine and session factory (None when no DATABASE_URL) ---

if SETTINGS.database_url:
    engine = create_async_engine(
        SETTINGS.database_url,
        echo=SETTINGS.is_dev,  # log SQL in dev only
        pool_size=5,
        max_overflow=10,
    )
    async_session_factory: async_sessionmaker[AsyncSession] | None = (
        async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
    )
else:
    engine = None
    async_session_factory = None


@asynccontextmanager
async def session_scope(
    factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """Yield a session inside a transaction; commit on exit.

    Unique-constraint violations surface as DuplicateKeyError so services
    can map them to a conflict.  Any other driver error is logged with its
    detail and re-raised as an opaque InternalError.
    """
    try:
        async with factory() as session:
            async with session.begin():
                yield session
    except IntegrityError as exc:
        logger.warning("Integrity error rejected write: %s", exc.orig)
        raise DuplicateKeyError(str(exc.orig)) from exc
    except SQLAlchemyError:
        logger.exception("Store operation failed")
        raise InternalError() from None


@asynccontextmanager
async def lifespan_db():
    """Startup/shutdown hook for the database engine."""
    if engine is None:
        logger.info("No DATABASE_URL configured; using in-memory repositories")
        yield
        return

    logger.info("Database engine created: %s", engine.url)
    yield
    await engine.dispose()
    logger.info("Database engine disposed")
