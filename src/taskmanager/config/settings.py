"""
Runtime configuration for the task manager API.
All values come from environment variables with sensible local defaults.
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


@dataclass
class Settings:
    """Server and store settings."""

    host: str = "0.0.0.0"
    port: int = 3000

    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = False

    # Seed the store with the "Sample Task" record on startup
    seed_sample: bool = True

    log_level: str = "INFO"

    def __post_init__(self):
        if not self.cors_allow_origins:
            self.cors_allow_origins = ["*"]
        self.log_level = self.log_level.upper()

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables."""
        origins = [o.strip() for o in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if o.strip()]
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3000")),
            cors_allow_origins=origins,
            cors_allow_credentials=_env_bool("CORS_ALLOW_CREDENTIALS", "false"),
            seed_sample=_env_bool("TASKMANAGER_SEED_SAMPLE", "true"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
