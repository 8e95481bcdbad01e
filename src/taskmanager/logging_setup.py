from __future__ import annotations
import io
import json
import logging
import os
from logging import Filter
from logging.config import dictConfig

DEFAULT_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class HealthProbeFilter(Filter):
    """Drop uvicorn access-log lines for /health probes."""
    def filter(self, record):
        if record.name != "uvicorn.access":
            return True
        args = record.args
        if isinstance(args, tuple) and len(args) >= 3 and str(args[2]).startswith("/health"):
            return False
        return True


def _stdout_only(level: str) -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "std": {"format": "%(asctime)s %(levelname)s %(name)s %(message)s"}
        },
        "filters": {
            "health_probe_filter": {
                "()": "taskmanager.logging_setup.HealthProbeFilter",
            }
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stdout",
                "formatter": "std",
                "level": level,
                "filters": ["health_probe_filter"],
            }
        },
        "root": {"level": level, "handlers": ["stdout"]},
    }


def _load_config_file(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as fh:
        text = fh.read()
    try:
        # Try JSON first
        return json.loads(text)
    except json.JSONDecodeError:
        import yaml
        return yaml.safe_load(io.StringIO(text))


def setup_logging(level: str | None = None, config_path_env: str = "TASKMANAGER_LOGCFG") -> None:
    """
    Call this as the FIRST thing in your entrypoint.
    - If TASKMANAGER_LOGCFG points to a YAML/JSON dictConfig file, we load it.
    - Otherwise we configure a single stdout handler at ``level`` (or LOG_LEVEL).
    """
    cfg_path = os.getenv(config_path_env, "").strip()
    if cfg_path and os.path.exists(cfg_path):
        dictConfig(_load_config_file(cfg_path))
        return

    dictConfig(_stdout_only((level or DEFAULT_LEVEL).upper()))

    # uvicorn may attach its own access handler with propagate=False
    logging.getLogger("uvicorn.access").addFilter(HealthProbeFilter())
