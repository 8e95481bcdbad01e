import os
from datetime import datetime, timedelta, timezone

# ----------------------------------------------------------------------
# Environment MUST be set before the app module reads settings
# ----------------------------------------------------------------------

os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.setdefault("TASKMANAGER_SEED_SAMPLE", "true")

import pytest
from fastapi.testclient import TestClient

from taskmanager.config.settings import Settings
from taskmanager.main import create_app
from taskmanager.store.task_store import TaskStore


class TickingClock:
    """Deterministic clock: every call is one second after the previous one."""

    def __init__(self, start=None):
        self.now = start or datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self):
        current = self.now
        self.now = current + timedelta(seconds=1)
        return current


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def store(clock):
    """Seeded store: task #1 "Sample Task", next id 2."""
    return TaskStore(seed=True, clock=clock)


@pytest.fixture
def empty_store(clock):
    return TaskStore(seed=False, clock=clock)


@pytest.fixture
def settings():
    return Settings(host="127.0.0.1", port=3000, cors_allow_origins=["*"], seed_sample=True)


@pytest.fixture
def app(store, settings):
    return create_app(store=store, settings=settings)


@pytest.fixture
def client(app):
    # raise_server_exceptions=False so the 500 handler's response is returned
    return TestClient(app, raise_server_exceptions=False)
