"""Background worker process.

RUN:  python -m coursehub.worker

Drains the task queues the API fills when NOTIFICATION_DISPATCH=queue.
Same image as the API, different command:

  api:    uvicorn coursehub.main:app --host 0.0.0.0 --port 8000
  worker: python -m coursehub.worker

A task whose handler raises is logged and dropped (notification failures are
also counted in notification_failures_total); there is no retry or
dead-letter queue.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine
from typing import Any

from coursehub.core.config import SETTINGS
from coursehub.core.logging import setup_logging
from coursehub.core.metrics import NOTIFICATION_FAILURES
from coursehub.db.engine import async_session_factory
from coursehub.repos.store import Store, in_memory_store, pg_store
from coursehub.services import notification_service
from coursehub.services.task_queue import NOTIFICATIONS_QUEUE, TaskQueue, task_queue

TaskHandler = Callable[[Store, dict], Coroutine[Any, Any, None]]

logger = logging.getLogger("coursehub.worker")

HANDLERS: dict[str, TaskHandler] = {}


def register_handler(queue: str):
    """Decorator: register a coroutine as the handler for a queue."""

    def decorator(func):
        HANDLERS[queue] = func
        return func

    return decorator


@register_handler(NOTIFICATIONS_QUEUE)
async def handle_notification(store: Store, payload: dict) -> None:
    notification = await notification_service.deliver(store.notifications, payload)
    logger.info(
        "Delivered notification=%s user=%s type=%s",
        notification.id,
        notification.user_id,
        notification.type,
    )


async def process_one(
    store: Store, queue: TaskQueue, queue_name: str, timeout: int = 1
) -> bool:
    """Dequeue and handle one task.  Returns False when the queue was empty."""
    task = await queue.dequeue(queue_name, timeout=timeout)
    if task is None:
        return False

    handler = HANDLERS[queue_name]
    try:
        await handler(store, task.payload)
        logger.info("Task %s on [%s] completed", task.id, queue_name)
    except Exception:
        if queue_name == NOTIFICATIONS_QUEUE:
            notification_type = task.payload.get("type", "unknown")
            NOTIFICATION_FAILURES.labels(type=notification_type).inc()
        logger.exception("Task %s on [%s] failed", task.id, queue_name)
    return True


async def run_worker(store: Store, queue: TaskQueue = task_queue) -> None:
    """Poll all registered queues round-robin, forever."""
    queues = list(HANDLERS.keys())
    logger.info("Worker started; listening on queues: %s", queues)

    while True:
        for queue_name in queues:
            await process_one(store, queue, queue_name)


def _default_store() -> Store:
    if async_session_factory is None:
        # An in-memory worker cannot see the API's store; useful only for demos.
        logger.warning("No DATABASE_URL configured; worker writes to its own memory")
        return in_memory_store()
    return pg_store(async_session_factory)


if __name__ == "__main__":
    setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)
    asyncio.run(run_worker(_default_store()))
