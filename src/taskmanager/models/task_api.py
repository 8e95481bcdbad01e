"""
Request structs for the task endpoints and the validation that turns them
into clean values for the store.

Each ``validate_*`` function returns a ``Validated`` result: either the cleaned
value or one ``ValidationFailure``. A field counts as supplied when it is
present in the body and not ``null``; an empty string is supplied.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Generic, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, StrictStr  # pyright: ignore[reportMissingImports]
from pydantic import ValidationError as PydanticValidationError  # pyright: ignore[reportMissingImports]

from ..errors import ValidationError
from .task import TaskStatus

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

_STATUS_LIST = ", ".join(TaskStatus.values())


class ValidationFailure(str, enum.Enum):
    TITLE_REQUIRED = "Title is required and cannot be empty"
    INVALID_STATUS = f"Status must be one of: {_STATUS_LIST}"
    STATUS_REQUIRED = f"Valid status is required: {_STATUS_LIST}"


@dataclass(frozen=True)
class Validated(Generic[T]):
    value: Optional[T] = None
    failure: Optional[ValidationFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    def unwrap(self) -> T:
        if self.failure is not None:
            raise ValidationError(self.failure.value)
        return self.value  # type: ignore[return-value]


# --- Request structs ---

class TaskCreate(BaseModel):
    title: Optional[StrictStr] = None
    description: Optional[StrictStr] = None
    status: Optional[StrictStr] = None

    model_config = ConfigDict(extra="ignore")


class TaskUpdate(BaseModel):
    title: Optional[StrictStr] = None
    description: Optional[StrictStr] = None
    status: Optional[StrictStr] = None

    model_config = ConfigDict(extra="ignore")


class StatusPatch(BaseModel):
    status: Optional[StrictStr] = None

    model_config = ConfigDict(extra="ignore")


# --- Clean values handed to the store ---

@dataclass(frozen=True)
class NewTask:
    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.PENDING


@dataclass(frozen=True)
class TaskChanges:
    """Fields to apply on update; ``None`` means leave unchanged."""

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None


def parse_body(model: Type[M], payload: Any) -> M:
    """Build a request struct from a decoded JSON body.

    A missing body is treated as ``{}``. Anything that is not a JSON object, or
    a field of the wrong JSON type, raises ``ValidationError``.
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Invalid request body")
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        fields = sorted({str(err["loc"][0]) for err in exc.errors() if err.get("loc")})
        raise ValidationError(f"Invalid value for field(s): {', '.join(fields)}") from exc


def _clean_title(raw: Optional[str]) -> Optional[str]:
    if raw is None:
        return None
    title = raw.strip()
    return title or None


def _parse_status(raw: str) -> Optional[TaskStatus]:
    # Exact, case-sensitive match on the enum values.
    try:
        return TaskStatus(raw)
    except ValueError:
        return None


def validate_create(req: TaskCreate) -> Validated[NewTask]:
    title = _clean_title(req.title)
    if title is None:
        return Validated(failure=ValidationFailure.TITLE_REQUIRED)

    status = TaskStatus.PENDING
    if req.status is not None:
        parsed = _parse_status(req.status)
        if parsed is None:
            return Validated(failure=ValidationFailure.INVALID_STATUS)
        status = parsed

    description = req.description.strip() if req.description is not None else ""
    return Validated(value=NewTask(title=title, description=description, status=status))


def validate_update(req: TaskUpdate) -> Validated[TaskChanges]:
    title = None
    if req.title is not None:
        title = _clean_title(req.title)
        if title is None:
            return Validated(failure=ValidationFailure.TITLE_REQUIRED)

    status = None
    if req.status is not None:
        status = _parse_status(req.status)
        if status is None:
            return Validated(failure=ValidationFailure.INVALID_STATUS)

    # "" is a supplied value and clears the description.
    description = req.description.strip() if req.description is not None else None
    return Validated(value=TaskChanges(title=title, description=description, status=status))


def validate_status_patch(req: StatusPatch) -> Validated[TaskStatus]:
    if req.status is None:
        return Validated(failure=ValidationFailure.STATUS_REQUIRED)
    status = _parse_status(req.status)
    if status is None:
        return Validated(failure=ValidationFailure.STATUS_REQUIRED)
    return Validated(value=status)
