import json

import httpx
import pytest

from src.api.errors import UpstreamError
from src.api.postgrest import PostgrestRepository
from src.api.settings import get_settings

BASE_URL = "https://project.supabase.co"


class FakePostgrest:
    """Minimal stand-in for a PostgREST table endpoint."""

    def __init__(self):
        self.rows = []
        self.next_id = 1
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        assert request.url.path == "/rest/v1/data"
        params = request.url.params
        row_id = int(params["id"][3:]) if "id" in params else None

        if request.method == "HEAD":
            return httpx.Response(200, headers={"Content-Range": f"*/{len(self.rows)}"})
        if request.method == "GET":
            assert params["order"] == "id.asc"
            return httpx.Response(200, json=sorted(self.rows, key=lambda r: r["id"]))
        if request.method == "POST":
            created = []
            for item in json.loads(request.content):
                row = {"id": self.next_id, "name": item["name"], "created_at": "2025-01-25T10:15:30.123456+00:00"}
                self.next_id += 1
                self.rows.append(row)
                created.append(row)
            return httpx.Response(201, json=created)
        if request.method == "PATCH":
            name = json.loads(request.content)["name"]
            matched = [r for r in self.rows if r["id"] == row_id]
            for r in matched:
                r["name"] = name
            return httpx.Response(200, json=matched)
        if request.method == "DELETE":
            self.rows = [r for r in self.rows if r["id"] != row_id]
            return httpx.Response(204)
        return httpx.Response(405)


@pytest.fixture
def fake():
    return FakePostgrest()


@pytest.fixture
def repo(fake):
    client = httpx.Client(base_url=BASE_URL, transport=httpx.MockTransport(fake))
    return PostgrestRepository(client)


class TestPostgrestRepository:
    def test_crud_round_trip(self, repo, fake):
        created = repo.create("Widget")
        assert created["id"] == 1
        assert created["name"] == "Widget"
        assert created["created_at"].year == 2025

        updated = repo.update(1, "Gadget")
        assert updated["name"] == "Gadget"
        assert updated["created_at"] == created["created_at"]

        assert [r["name"] for r in repo.list()] == ["Gadget"]
        repo.delete(1)
        assert repo.list() == []

    def test_requests_ask_for_representation(self, repo, fake):
        repo.create("Widget")
        repo.update(1, "Gadget")
        post, patch = fake.requests
        assert post.headers["Prefer"] == "return=representation"
        assert patch.headers["Prefer"] == "return=representation"
        assert patch.url.params["id"] == "eq.1"

    def test_update_missing_returns_none(self, repo):
        assert repo.update(7, "Nope") is None

    def test_ping_uses_exact_count(self, repo, fake):
        repo.ping()
        assert fake.requests[-1].method == "HEAD"
        assert fake.requests[-1].headers["Prefer"] == "count=exact"

    def test_error_message_passed_through(self):
        def handler(request):
            return httpx.Response(
                404,
                json={"code": "42P01", "message": 'relation "public.data" does not exist'},
            )

        repo = PostgrestRepository(httpx.Client(base_url=BASE_URL, transport=httpx.MockTransport(handler)))
        with pytest.raises(UpstreamError) as exc_info:
            repo.list()
        assert exc_info.value.message == 'relation "public.data" does not exist'

    def test_error_without_json_body(self):
        repo = PostgrestRepository(
            httpx.Client(base_url=BASE_URL, transport=httpx.MockTransport(lambda r: httpx.Response(503)))
        )
        with pytest.raises(UpstreamError) as exc_info:
            repo.ping()
        assert exc_info.value.message == "503 Service Unavailable"

    def test_transport_failure(self):
        def handler(request):
            raise httpx.ConnectError("Name or service not known", request=request)

        repo = PostgrestRepository(httpx.Client(base_url=BASE_URL, transport=httpx.MockTransport(handler)))
        with pytest.raises(UpstreamError) as exc_info:
            repo.delete(1)
        assert exc_info.value.message == "Name or service not known"


class TestFromSettings:
    def test_requires_credentials(self, monkeypatch):
        monkeypatch.delenv("SUPABASE_URL", raising=False)
        monkeypatch.delenv("SUPABASE_KEY", raising=False)
        with pytest.raises(ValueError):
            PostgrestRepository.from_settings(get_settings())

    def test_client_headers(self, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", BASE_URL + "/")
        monkeypatch.setenv("SUPABASE_KEY", "anon-key")
        monkeypatch.setenv("DATA_TABLE", "items")
        repo = PostgrestRepository.from_settings(get_settings())
        try:
            assert repo._client.headers["apikey"] == "anon-key"
            assert repo._client.headers["Authorization"] == "Bearer anon-key"
            assert repo._client.base_url.host == "project.supabase.co"
            assert repo._path == "/rest/v1/items"
        finally:
            repo.close()
