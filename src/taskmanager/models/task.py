"""
Pydantic models for task records.

The store keeps ``Task`` instances; the HTTP layer serializes them by alias,
so ``created_at``/``updated_at`` go over the wire as ``createdAt``/``updatedAt``.
"""

from __future__ import annotations

import enum
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_serializer  # pyright: ignore[reportMissingImports]


class TaskStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"

    @classmethod
    def values(cls) -> list[str]:
        return [s.value for s in cls]


def format_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a ``Z`` suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Task(BaseModel):
    """A single task record."""

    id: int
    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.PENDING
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True)

    @field_serializer("status")
    def _serialize_status(self, v: TaskStatus) -> str:
        return v.value

    @field_serializer("created_at", "updated_at")
    def _serialize_ts(self, v: datetime) -> str:
        return format_timestamp(v)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)


class TaskStats(BaseModel):
    total: int = 0
    pending: int = 0
    in_progress: int = Field(default=0, alias="in-progress")
    completed: int = 0

    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)
