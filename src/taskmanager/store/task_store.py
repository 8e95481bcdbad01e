from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Callable, List, Optional

from ..errors import NotFoundError
from ..models.task import Task, TaskStats, TaskStatus
from ..models.task_api import NewTask, TaskChanges

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

SAMPLE_TASK = NewTask(title="Sample Task", description="This is a sample task")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TaskStore:
    """
    In-memory task collection with a sequential ID counter.

    - records are kept in insertion order
    - IDs start at 1 and are never reused, even after delete
    - every public method returns copies, never the stored records

    Thread-safety:
    - FastAPI runs sync endpoints in a thread pool, so every operation
      holds ``self._lock`` for its whole read-modify-write
    """

    def __init__(self, *, seed: bool = True, clock: Optional[Clock] = None) -> None:
        self._clock: Clock = clock or utc_now
        self._lock = threading.RLock()
        self._tasks: List[Task] = []
        self._next_id = 1
        if seed:
            self.create(SAMPLE_TASK)
        logger.info("TaskStore ready seeded=%s next_id=%s", seed, self._next_id)

    @property
    def next_id(self) -> int:
        return self._next_id

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    # ---- low-level helpers ----

    def _index_of(self, task_id: int) -> int:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        raise NotFoundError()

    # ---- operations ----

    def list(self, status: Optional[str] = None) -> List[Task]:
        """All tasks, or those whose status equals ``status`` exactly.

        An unknown status gives an empty list; ``None`` or ``""`` disables the filter.
        """
        with self._lock:
            if not status:
                return [t.model_copy() for t in self._tasks]
            return [t.model_copy() for t in self._tasks if t.status.value == status]

    def get(self, task_id: int) -> Task:
        with self._lock:
            return self._tasks[self._index_of(task_id)].model_copy()

    def create(self, new: NewTask) -> Task:
        with self._lock:
            now = self._clock()
            task = Task(
                id=self._next_id,
                title=new.title,
                description=new.description,
                status=new.status,
                created_at=now,
                updated_at=now,
            )
            self._next_id += 1
            self._tasks.append(task)
            logger.debug("Created task %s (status=%s)", task.id, task.status.value)
            return task.model_copy()

    def update(self, task_id: int, changes: TaskChanges) -> Task:
        with self._lock:
            task = self._tasks[self._index_of(task_id)]
            if changes.title is not None:
                task.title = changes.title
            if changes.description is not None:
                task.description = changes.description
            if changes.status is not None:
                task.status = changes.status
            task.updated_at = self._clock()
            logger.debug("Updated task %s", task_id)
            return task.model_copy()

    def set_status(self, task_id: int, status: TaskStatus) -> Task:
        with self._lock:
            task = self._tasks[self._index_of(task_id)]
            task.status = status
            task.updated_at = self._clock()
            logger.debug("Task %s status -> %s", task_id, status.value)
            return task.model_copy()

    def delete(self, task_id: int) -> Task:
        with self._lock:
            removed = self._tasks.pop(self._index_of(task_id))
            logger.debug("Deleted task %s", task_id)
            return removed

    def stats(self) -> TaskStats:
        with self._lock:
            counts = {s: 0 for s in TaskStatus}
            for task in self._tasks:
                counts[task.status] += 1
            return TaskStats(
                total=len(self._tasks),
                pending=counts[TaskStatus.PENDING],
                in_progress=counts[TaskStatus.IN_PROGRESS],
                completed=counts[TaskStatus.COMPLETED],
            )
