from __future__ import annotations
import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from fastapi import APIRouter, Depends  # pyright: ignore[reportMissingImports]
from fastapi.responses import JSONResponse  # pyright: ignore[reportMissingImports]

from ...errors import NotFoundError, TaskManagerError
from ...models.envelope import ok
from ...models.task_api import (
    StatusPatch,
    TaskCreate,
    TaskUpdate,
    parse_body,
    validate_create,
    validate_status_patch,
    validate_update,
)
from ...store.task_store import TaskStore
from ...telemetry.metrics import TASK_OPERATIONS
from ..deps import get_payload, get_task_store

router = APIRouter()
logger = logging.getLogger(__name__)


# --- Helpers ---
@contextmanager
def _observe(operation: str) -> Iterator[None]:
    """Count one store operation by outcome (ok / ValidationError / NotFoundError)."""
    try:
        yield
    except TaskManagerError as exc:
        TASK_OPERATIONS.labels(operation, type(exc).__name__).inc()
        raise
    else:
        TASK_OPERATIONS.labels(operation, "ok").inc()


def _parse_task_id(raw: str) -> int:
    """Base-10 digits only; anything else can never match a task."""
    if not (raw.isascii() and raw.isdigit()):
        raise NotFoundError()
    try:
        return int(raw)
    except ValueError:
        # past the interpreter's int digit limit
        raise NotFoundError()


# --- Endpoints ---

@router.get("/tasks")
def list_tasks(
    status: Optional[str] = None,
    store: TaskStore = Depends(get_task_store),
) -> JSONResponse:
    with _observe("list"):
        tasks = store.list(status)
    return ok([t.to_dict() for t in tasks], count=len(tasks))


@router.get("/tasks/{task_id}")
def get_task(task_id: str, store: TaskStore = Depends(get_task_store)) -> JSONResponse:
    with _observe("get"):
        task = store.get(_parse_task_id(task_id))
    return ok(task.to_dict())


@router.post("/tasks")
def create_task(
    payload: Any = Depends(get_payload),
    store: TaskStore = Depends(get_task_store),
) -> JSONResponse:
    with _observe("create"):
        new = validate_create(parse_body(TaskCreate, payload)).unwrap()
        task = store.create(new)
    logger.info(f"Task {task.id} created (status={task.status.value})")
    return ok(task.to_dict(), message="Task created successfully", status_code=201)


@router.put("/tasks/{task_id}")
def update_task(
    task_id: str,
    payload: Any = Depends(get_payload),
    store: TaskStore = Depends(get_task_store),
) -> JSONResponse:
    with _observe("update"):
        tid = _parse_task_id(task_id)
        store.get(tid)
        changes = validate_update(parse_body(TaskUpdate, payload)).unwrap()
        task = store.update(tid, changes)
    return ok(task.to_dict(), message="Task updated successfully")


@router.patch("/tasks/{task_id}/status")
def update_task_status(
    task_id: str,
    payload: Any = Depends(get_payload),
    store: TaskStore = Depends(get_task_store),
) -> JSONResponse:
    with _observe("set_status"):
        tid = _parse_task_id(task_id)
        store.get(tid)
        status = validate_status_patch(parse_body(StatusPatch, payload)).unwrap()
        task = store.set_status(tid, status)
    return ok(task.to_dict(), message="Task status updated successfully")


@router.delete("/tasks/{task_id}")
def delete_task(task_id: str, store: TaskStore = Depends(get_task_store)) -> JSONResponse:
    with _observe("delete"):
        task = store.delete(_parse_task_id(task_id))
    logger.info(f"Task {task.id} deleted")
    return ok(task.to_dict(), message="Task deleted successfully")
