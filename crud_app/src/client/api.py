from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from .config import get_client_settings


# PUBLIC_INTERFACE
class TransportError(Exception):
    """Non-2xx response or network failure while calling the data service."""


# PUBLIC_INTERFACE
class ApiClient:
    """
    Thin JSON wrapper over the data service.

    Every call returns the decoded response body, or raises TransportError when
    the request fails at the network level or the status is not 2xx. Error
    bodies are not inspected.
    """

    def __init__(self, client: Optional[httpx.Client] = None) -> None:
        if client is None:
            settings = get_client_settings()
            client = httpx.Client(base_url=settings.api_url, timeout=settings.timeout_seconds)
        self._client = client

    def fetch(self, endpoint: str, method: str = "GET", data: Any = None) -> Dict[str, Any]:
        try:
            response = self._client.request(
                method,
                endpoint,
                json=data,
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as e:
            raise TransportError(str(e) or e.__class__.__name__) from e
        if response.is_error:
            raise TransportError(f"API Error: {response.status_code}")
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"Invalid JSON from {endpoint}") from e

    def get(self, endpoint: str) -> Dict[str, Any]:
        return self.fetch(endpoint, "GET")

    def post(self, endpoint: str, data: Any) -> Dict[str, Any]:
        return self.fetch(endpoint, "POST", data)

    def put(self, endpoint: str, data: Any) -> Dict[str, Any]:
        return self.fetch(endpoint, "PUT", data)

    def delete(self, endpoint: str) -> Dict[str, Any]:
        return self.fetch(endpoint, "DELETE")

    def close(self) -> None:
        self._client.close()
