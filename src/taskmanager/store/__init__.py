from .task_store import TaskStore, utc_now

__all__ = ["TaskStore", "utc_now"]
