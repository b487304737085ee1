from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal

AppEnv = Literal["dev", "test", "prod"]
LogLevel = Literal["debug", "info", "warning", "error"]
NotificationDispatch = Literal["inline", "queue"]

_TRUTHY = ("1", "true", "yes", "on")


def _getenv(name: str, default: str) -> str:
    # Centralize env access so casting and validation live in one place
    return os.environ.get(name, default).strip()


@dataclass(frozen=True)
class Settings:
    app_env: AppEnv
    log_level: LogLevel
    log_json: bool
    port: int
    database_url: str | None
    redis_url: str | None
    notification_dispatch: NotificationDispatch = "inline"
    notification_page_size: int = 50

    @property
    def is_dev(self) -> bool:
        return self.app_env == "dev"

    @property
    def is_test(self) -> bool:
        return self.app_env == "test"

    @property
    def is_prod(self) -> bool:
        return self.app_env == "prod"

    @property
    def queue_notifications(self) -> bool:
        return self.notification_dispatch == "queue"


def load_settings() -> Settings:
    app_env_raw = _getenv("APP_ENV", "dev").lower()
    log_level_raw = _getenv("LOG_LEVEL", "info").lower()
    log_json_raw = _getenv("LOG_JSON", "false").lower()
    port_raw = _getenv("PORT", "8000")
    dispatch_raw = _getenv("NOTIFICATION_DISPATCH", "inline").lower()
    page_size_raw = _getenv("NOTIFICATION_PAGE_SIZE", "50")

    if app_env_raw not in ("dev", "test", "prod"):
        raise ValueError(f"APP_ENV must be dev|test|prod (got {app_env_raw!r})")

    if log_level_raw not in ("debug", "info", "warning", "error"):
        raise ValueError(
            f"LOG_LEVEL must be debug|info|warning|error (got {log_level_raw!r})"
        )

    if dispatch_raw not in ("inline", "queue"):
        raise ValueError(
            f"NOTIFICATION_DISPATCH must be inline|queue (got {dispatch_raw!r})"
        )

    try:
        port = int(port_raw)
    except ValueError:
        raise ValueError(f"PORT must be an integer (got {port_raw!r})") from None

    try:
        page_size = int(page_size_raw)
    except ValueError:
        raise ValueError(
            f"NOTIFICATION_PAGE_SIZE must be an integer (got {page_size_raw!r})"
        ) from None
    if page_size <= 0:
        raise ValueError(
            f"NOTIFICATION_PAGE_SIZE must be positive (got {page_size_raw!r})"
        )

    database_url = _getenv("DATABASE_URL", "") or None
    redis_url = _getenv("REDIS_URL", "") or None

    # The in-memory queue lives in the API process; no worker can drain it.
    if dispatch_raw == "queue" and redis_url is None:
        raise ValueError("NOTIFICATION_DISPATCH=queue requires REDIS_URL")

    return Settings(  # type: ignore[arg-type]
        app_env=app_env_raw,
        log_level=log_level_raw,
        log_json=log_json_raw in _TRUTHY,
        port=port,
        database_url=database_url,
        redis_url=redis_url,
        notification_dispatch=dispatch_raw,
        notification_page_size=page_size,
    )


# Module-level singleton so imports are cheap
SETTINGS = load_settings()
