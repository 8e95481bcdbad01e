"""User-facing error kinds. Each carries the HTTP status it maps to."""

from __future__ import annotations


class TaskManagerError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TaskManagerError):
    """Request fields failed validation (missing title, bad status, wrong type)."""

    status_code = 400


class NotFoundError(TaskManagerError):
    """No task with the requested ID."""

    status_code = 404

    def __init__(self, message: str = "Task not found"):
        super().__init__(message)
