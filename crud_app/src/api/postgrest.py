"""
Repository backed by the hosted database's REST interface (Supabase/PostgREST).

Each repository method maps onto a single PostgREST request:

    ping    HEAD   /rest/v1/<table>?select=*          Prefer: count=exact
    list    GET    /rest/v1/<table>?select=*&order=id.asc
    create  POST   /rest/v1/<table>?select=*          Prefer: return=representation
    update  PATCH  /rest/v1/<table>?id=eq.<id>&select=*  Prefer: return=representation
    delete  DELETE /rest/v1/<table>?id=eq.<id>

Non-2xx responses and transport failures are raised as ``UpstreamError`` with
the ``message`` reported by PostgREST, or the transport error text.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from .errors import UpstreamError
from .models import RecordEntity
from .repositories import Repository
from .schemas import RecordOut
from .settings import Settings

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return response.text or f"{response.status_code} {response.reason_phrase}"


def _to_entity(row: Dict[str, Any]) -> RecordEntity:
    # Validate through the output schema so timestamps arrive as datetimes
    record = RecordOut.model_validate(row)
    return {"id": record.id, "name": record.name, "created_at": record.created_at}


# PUBLIC_INTERFACE
class PostgrestRepository(Repository):
    """Records stored in a hosted Postgres table exposed through PostgREST."""

    def __init__(self, client: httpx.Client, table: str = "data") -> None:
        self._client = client
        self._path = f"/rest/v1/{table}"

    @classmethod
    def from_settings(cls, settings: Settings) -> "PostgrestRepository":
        if not settings.supabase_url or not settings.supabase_key:
            raise ValueError("SUPABASE_URL and SUPABASE_KEY are required for the postgrest backend")
        client = httpx.Client(
            base_url=settings.supabase_url.rstrip("/"),
            headers={
                "apikey": settings.supabase_key,
                "Authorization": f"Bearer {settings.supabase_key}",
            },
            timeout=settings.upstream_timeout_seconds,
        )
        return cls(client, table=settings.data_table)

    def _request(
        self,
        method: str,
        params: Optional[Dict[str, str]] = None,
        json: Any = None,
        prefer: Optional[str] = None,
    ) -> httpx.Response:
        headers = {"Prefer": prefer} if prefer else None
        try:
            response = self._client.request(method, self._path, params=params, json=json, headers=headers)
        except httpx.HTTPError as e:
            raise UpstreamError(str(e) or e.__class__.__name__) from e
        if response.is_error:
            raise UpstreamError(_error_message(response))
        return response

    def _rows(self, response: httpx.Response) -> List[RecordEntity]:
        try:
            rows = response.json()
        except ValueError as e:
            raise UpstreamError(f"Invalid response from database: {e}") from e
        return [_to_entity(r) for r in rows]

    def ping(self) -> None:
        self._request("HEAD", params={"select": "*"}, prefer="count=exact")

    def list(self) -> List[RecordEntity]:
        response = self._request("GET", params={"select": "*", "order": "id.asc"})
        return self._rows(response)

    def create(self, name: str) -> RecordEntity:
        response = self._request(
            "POST", params={"select": "*"}, json=[{"name": name}], prefer="return=representation"
        )
        rows = self._rows(response)
        if not rows:
            raise UpstreamError("Database returned no row for insert")
        return rows[0]

    def update(self, record_id: int, name: str) -> Optional[RecordEntity]:
        response = self._request(
            "PATCH",
            params={"id": f"eq.{record_id}", "select": "*"},
            json={"name": name},
            prefer="return=representation",
        )
        rows = self._rows(response)
        return rows[0] if rows else None

    def delete(self, record_id: int) -> None:
        self._request("DELETE", params={"id": f"eq.{record_id}"})

    def close(self) -> None:
        self._client.close()
