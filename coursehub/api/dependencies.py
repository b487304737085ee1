"""FastAPI dependencies: the store and the notifier.

There is no authentication layer; the acting user id arrives in the
request body or query string and services authorize it against the store.
Tests replace get_store via app.dependency_overrides.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from coursehub.core.config import SETTINGS
from coursehub.db.engine import async_session_factory
from coursehub.repos.store import Store, in_memory_store, pg_store
from coursehub.services.notification_service import (
    InlineNotifier,
    Notifier,
    QueuedNotifier,
)
from coursehub.services.task_queue import task_queue

if async_session_factory is not None:
    _store = pg_store(async_session_factory)
else:
    _store = in_memory_store()


def get_store() -> Store:
    return _store


def get_notifier(store: Annotated[Store, Depends(get_store)]) -> Notifier:
    if SETTINGS.queue_notifications:
        return QueuedNotifier(task_queue)
    return InlineNotifier(store.notifications)


StoreDep = Annotated[Store, Depends(get_store)]
NotifierDep = Annotated[Notifier, Depends(get_notifier)]
