from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class ClientSettings:
    """
    Client settings loaded from environment variables.

    Env vars:
    - API_URL: base URL of the data service. Default 'http://localhost:5000'
    - API_TIMEOUT_SECONDS: per-request timeout. Default 30
    """

    api_url: str
    timeout_seconds: float


# PUBLIC_INTERFACE
def get_client_settings() -> ClientSettings:
    """Return client settings loaded from environment variables."""
    api_url = (os.getenv("API_URL") or "http://localhost:5000").strip().rstrip("/")
    try:
        timeout = float(os.getenv("API_TIMEOUT_SECONDS") or "30")
    except ValueError:
        timeout = 30.0
    return ClientSettings(api_url=api_url, timeout_seconds=timeout)
