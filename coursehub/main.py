from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from coursehub.api.assignments import router as assignments_router
from coursehub.api.courses import router as courses_router
from coursehub.api.discussions import router as discussions_router
from coursehub.api.health import router as health_router
from coursehub.api.materials import router as materials_router
from coursehub.api.notifications import router as notifications_router
from coursehub.api.submissions import router as submissions_router
from coursehub.api.users import router as users_router
from coursehub.core.config import SETTINGS
from coursehub.core.errors import CourseHubError
from coursehub.core.logging import setup_logging
from coursehub.core.metrics import DOMAIN_ERRORS
from coursehub.db.engine import lifespan_db
from coursehub.db.redis import lifespan_redis
from coursehub.middleware.metrics import MetricsMiddleware
from coursehub.middleware.request_context import RequestContextMiddleware

# Configure logging before anything else runs.
setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    # Nested so teardown runs in reverse order.
    async with lifespan_db():
        async with lifespan_redis():
            yield


app = FastAPI(
    title="coursehub",
    lifespan=lifespan,
    docs_url="/docs" if SETTINGS.is_dev else None,
    redoc_url="/redoc" if SETTINGS.is_dev else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Last-added runs first: RequestContext -> Metrics -> CORS -> route.
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestContextMiddleware)


def _error_response(kind: str, status_code: int, message: str) -> JSONResponse:
    DOMAIN_ERRORS.labels(kind=kind).inc()
    return JSONResponse(
        status_code=status_code,
        content={"ok": False, "kind": kind, "message": message},
    )


@app.exception_handler(CourseHubError)
async def handle_domain_error(request: Request, exc: CourseHubError) -> JSONResponse:
    level = logging.ERROR if exc.status_code >= 500 else logging.INFO
    logger.log(
        level,
        "%s %s rejected kind=%s: %s",
        request.method,
        request.url.path,
        exc.kind,
        exc.message,
        extra={"error_kind": exc.kind},
    )
    return _error_response(exc.kind, exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def handle_request_validation(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # Report the first offending field by its location, e.g. "body.teacher_id".
    errors = exc.errors()
    if errors:
        first = errors[0]
        where = ".".join(str(p) for p in first.get("loc", ()))
        message = f"{where}: {first.get('msg', 'invalid')}"
    else:
        message = "Invalid request"
    logger.info(
        "%s %s rejected kind=validation: %s",
        request.method,
        request.url.path,
        message,
        extra={"error_kind": "validation"},
    )
    return _error_response("validation", 400, message)


@app.exception_handler(Exception)
async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "%s %s crashed",
        request.method,
        request.url.path,
        extra={"error_kind": "internal"},
    )
    return _error_response("internal", 500, "Internal server error")


app.include_router(health_router)
app.include_router(users_router)
app.include_router(courses_router)
app.include_router(assignments_router)
app.include_router(submissions_router)
app.include_router(discussions_router)
app.include_router(materials_router)
app.include_router(notifications_router)

logger.info(
    "coursehub started  env=%s log_level=%s port=%d notifications=%s docs=%s",
    SETTINGS.app_env,
    SETTINGS.log_level,
    SETTINGS.port,
    SETTINGS.notification_dispatch,
    "on" if SETTINGS.is_dev else "off",
)
