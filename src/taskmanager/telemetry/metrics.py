from prometheus_client import Counter, Histogram  # pyright: ignore[reportMissingImports]

TASK_OPERATIONS = Counter(
    "taskmanager_task_operations_total",
    "Task store operations by outcome",
    ["operation", "outcome"],
)
REQUEST_LATENCY = Histogram(
    "taskmanager_request_latency_seconds",
    "HTTP request latency seconds",
    ["method", "route"],
)
