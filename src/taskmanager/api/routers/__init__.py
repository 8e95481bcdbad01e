from .tasks_router import router as tasks_router
from .stats_router import router as stats_router

__all__ = ["tasks_router", "stats_router"]
