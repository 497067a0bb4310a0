from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Values from a local .env never override variables already set in the environment
load_dotenv()


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - HOST / PORT: bind address for the HTTP server. Default '0.0.0.0' / 5000
    - FRONTEND_URL: the single origin allowed by CORS. Default 'http://localhost:5173'
    - PERSISTENCE_BACKEND: 'memory' (default), 'sqlite' or 'postgrest'
    - SQLITE_DB_PATH: path to sqlite db file. Default './data/records.db'
    - SUPABASE_URL / SUPABASE_KEY: hosted database REST endpoint and API key (postgrest backend)
    - DATA_TABLE: name of the records table. Default 'data'
    - UPSTREAM_TIMEOUT_SECONDS: timeout applied to every hosted database call. Default 10
    - LOG_LEVEL: root logging level. Default 'INFO'
    """

    host: str
    port: int
    frontend_url: str
    persistence_backend: str
    sqlite_db_path: str
    supabase_url: Optional[str]
    supabase_key: Optional[str]
    data_table: str
    upstream_timeout_seconds: float
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


def _parse_float(value: str, default: float) -> float:
    try:
        parsed = float(value.strip())
    except ValueError:
        return default
    return parsed if parsed > 0 else default


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    backend = _get_env("PERSISTENCE_BACKEND", "memory").strip().lower()
    if backend not in {"memory", "sqlite", "postgrest"}:
        # Fallback to memory if unsupported
        backend = "memory"

    return Settings(
        host=_get_env("HOST", "0.0.0.0").strip(),
        port=_parse_int(_get_env("PORT", "5000"), 5000),
        frontend_url=_get_env("FRONTEND_URL", "http://localhost:5173").strip().rstrip("/"),
        persistence_backend=backend,
        sqlite_db_path=_get_env("SQLITE_DB_PATH", "./data/records.db").strip(),
        supabase_url=os.getenv("SUPABASE_URL") or None,
        supabase_key=os.getenv("SUPABASE_KEY") or None,
        data_table=_get_env("DATA_TABLE", "data").strip(),
        upstream_timeout_seconds=_parse_float(_get_env("UPSTREAM_TIMEOUT_SECONDS", "10"), 10.0),
        log_level=_get_env("LOG_LEVEL", "INFO").strip().upper(),
    )
