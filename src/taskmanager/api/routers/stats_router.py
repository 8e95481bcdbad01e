from fastapi import APIRouter, Depends  # pyright: ignore[reportMissingImports]
from fastapi.responses import JSONResponse  # pyright: ignore[reportMissingImports]

from ...models.envelope import ok
from ...store.task_store import TaskStore
from ..deps import get_task_store


router = APIRouter()


@router.get("/stats")
def get_stats(store: TaskStore = Depends(get_task_store)) -> JSONResponse:
    """Total plus per-status counts over the current collection."""
    return ok(store.stats().to_dict())
