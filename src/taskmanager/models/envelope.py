from __future__ import annotations

from typing import Any, Optional

from fastapi.responses import JSONResponse  # pyright: ignore[reportMissingImports]
from pydantic import BaseModel  # pyright: ignore[reportMissingImports]


class Envelope(BaseModel):
    """Uniform response wrapper. Unset keys are left out of the body."""

    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    message: Optional[str] = None
    count: Optional[int] = None

    def to_dict(self) -> dict:
        return self.model_dump(exclude_none=True)


def ok(data: Any = None, *, message: Optional[str] = None, count: Optional[int] = None,
       status_code: int = 200) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=Envelope(success=True, data=data, message=message, count=count).to_dict(),
    )


def fail(error: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=Envelope(success=False, error=error).to_dict())
