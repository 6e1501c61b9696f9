from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List

from dotenv import load_dotenv

# .env in the working directory; real environment variables take precedence
load_dotenv(override=False)

DEFAULT_MONGO_URI = "mongodb://localhost:27017/studyDashboard"
DEFAULT_DATABASE = "studyDashboard"


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - PERSISTENCE_BACKEND: 'memory' (default) or 'mongo'
    - MONGO_URI: MongoDB connection string. Default 'mongodb://localhost:27017/studyDashboard'
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - PORT: port the server listens on (default: 5001)
    - LOG_LEVEL: root log level (default: INFO)
    """

    persistence_backend: str
    mongo_uri: str
    cors_allow_origins: List[str]
    port: int
    log_level: str


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_int(value: str, default: int) -> int:
    try:
        return int(value.strip())
    except ValueError:
        return default


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    backend = _get_env("PERSISTENCE_BACKEND", "memory").strip().lower()
    if backend not in {"memory", "mongo"}:
        backend = "memory"

    return Settings(
        persistence_backend=backend,
        mongo_uri=_get_env("MONGO_URI", DEFAULT_MONGO_URI).strip(),
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
        port=_parse_int(_get_env("PORT", "5001"), 5001),
        log_level=_get_env("LOG_LEVEL", "INFO").strip().upper(),
    )
