# Shared dependencies for the routers.
import json
from typing import Any

from fastapi import Request  # pyright: ignore[reportMissingImports]

from ..store.task_store import TaskStore

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def get_task_store(request: Request) -> TaskStore:
    """The store owned by the running application (set in ``create_app``)."""
    return request.app.state.task_store


async def get_payload(request: Request) -> Any:
    """
    Decoded request body for the write endpoints.

    - url-encoded forms become a plain dict of strings
    - anything else is read as JSON; an empty body gives ``None``
    - undecodable bodies come back as raw bytes, which ``parse_body`` rejects
      only after the handler has looked up the task
    """
    content_type = request.headers.get("content-type", "")
    if content_type.split(";")[0].strip().lower() == FORM_CONTENT_TYPE:
        form = await request.form()
        return {key: value for key, value in form.items()}

    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return raw
