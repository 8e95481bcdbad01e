"""
Task Manager FastAPI application.

``create_app`` builds an application around an explicitly owned ``TaskStore``
(held on ``app.state``), so tests and embedders can run independent instances.
Every response, success or failure, uses the ``{success, data?, error?,
message?, count?}`` envelope.
"""

import logging
from contextlib import asynccontextmanager
from time import perf_counter
from typing import Optional

from fastapi import FastAPI, Request, Response  # pyright: ignore[reportMissingImports]
from fastapi.exceptions import RequestValidationError  # pyright: ignore[reportMissingImports]
from fastapi.middleware.cors import CORSMiddleware  # pyright: ignore[reportMissingImports]
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest  # pyright: ignore[reportMissingImports]
from starlette.exceptions import HTTPException as StarletteHTTPException  # pyright: ignore[reportMissingImports]

from . import __version__
from .api.routers import stats_router, tasks_router
from .config.settings import Settings, get_settings
from .errors import TaskManagerError
from .logging_setup import setup_logging
from .models.envelope import fail
from .store.task_store import TaskStore
from .telemetry.metrics import REQUEST_LATENCY

logger = logging.getLogger(__name__)

ENDPOINTS = {
    "GET /api/tasks": "Get all tasks",
    "GET /api/tasks/:id": "Get a specific task",
    "POST /api/tasks": "Create a new task",
    "PUT /api/tasks/:id": "Update a task",
    "PATCH /api/tasks/:id/status": "Update task status only",
    "DELETE /api/tasks/:id": "Delete a task",
    "GET /api/stats": "Get task statistics",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Task Manager API (tasks=%s)", len(app.state.task_store))
    yield
    logger.info("Task Manager API shutdown complete")


def _register_handlers(app: FastAPI) -> None:
    @app.exception_handler(TaskManagerError)
    async def task_error_handler(request: Request, exc: TaskManagerError):
        return fail(exc.message, exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.debug("Rejected body for %s %s: %s", request.method, request.url.path, exc.errors())
        return fail("Invalid request body", 400)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        # Unknown paths and unsupported methods both read as "no such route".
        if exc.status_code in (404, 405):
            return fail("Route not found", 404)
        return fail(str(exc.detail), exc.status_code)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return fail("Something went wrong!", 500)


def create_app(store: Optional[TaskStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title="Task Manager API",
        description="In-memory task CRUD with status filtering and stats",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.task_store = store if store is not None else TaskStore(seed=settings.seed_sample)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            elapsed = perf_counter() - started
            route = request.scope.get("route")
            REQUEST_LATENCY.labels(request.method, getattr(route, "path", "unmatched")).observe(elapsed)
            logger.info("%s %s -> %s (%.1fms)", request.method, request.url.path, status_code, elapsed * 1000)

    _register_handlers(app)

    app.include_router(tasks_router, prefix="/api", tags=["Tasks"])
    app.include_router(stats_router, prefix="/api", tags=["Stats"])

    @app.get("/")
    def root():
        return {"success": True, "message": "Task Manager API", "version": __version__, "endpoints": ENDPOINTS}

    @app.get("/health")
    def health_check():
        return {"status": "healthy", "service": "taskmanager-api", "version": __version__}

    @app.get("/metrics", include_in_schema=False)
    def metrics():
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    return app


def run() -> None:
    """Console entry point: configure logging and serve with uvicorn."""
    settings = get_settings()
    setup_logging(settings.log_level)

    import uvicorn
    logger.info("Task Manager API listening on http://%s:%s", settings.host, settings.port)
    uvicorn.run(
        create_app(settings=settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
        proxy_headers=True,
        forwarded_allow_ips="*",
    )


if __name__ == "__main__":
    run()
