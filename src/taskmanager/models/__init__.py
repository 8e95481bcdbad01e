"""
Models for the task manager API.

Pydantic records (Task, TaskStats), request structs with their validation,
and the response envelope.
"""

from .task import Task, TaskStats, TaskStatus, format_timestamp
from .task_api import (
    NewTask,
    StatusPatch,
    TaskChanges,
    TaskCreate,
    TaskUpdate,
    Validated,
    ValidationFailure,
    parse_body,
    validate_create,
    validate_status_patch,
    validate_update,
)
from .envelope import Envelope

__all__ = [
    "Task",
    "TaskStats",
    "TaskStatus",
    "format_timestamp",
    "NewTask",
    "StatusPatch",
    "TaskChanges",
    "TaskCreate",
    "TaskUpdate",
    "Validated",
    "ValidationFailure",
    "parse_body",
    "validate_create",
    "validate_status_patch",
    "validate_update",
    "Envelope",
]
