"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
server starts with no configuration at all, listening on port 5000
and serving routes under ``/api``.
"""

import os
from dataclasses import dataclass
from typing import List, Optional


def _as_bool(value: str) -> bool:
    return value.lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "FitnessBuddy API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    api_prefix: str = os.getenv("API_PREFIX", "/api")
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "5000"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # Seed the store with one example profile and one example workout
    # at startup.  Disable with SEED_DATA=false for an empty store.
    seed_data: bool = _as_bool(os.getenv("SEED_DATA", "true"))

    # Comma‑separated list of origins allowed by the CORS middleware.
    # ``*`` allows any origin, which is what the browser client expects
    # when it runs from a dev server on another port.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    @property
    def allowed_origins(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
