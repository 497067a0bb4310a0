import sqlite3

import pytest

from src.api.db import SQLiteRepository
from src.api.errors import UpstreamError


@pytest.fixture
def repo(tmp_path):
    return SQLiteRepository(str(tmp_path / "nested" / "records.db"))


class TestSQLiteRepository:
    def test_create_and_list(self, repo):
        first = repo.create("Widget")
        second = repo.create("Gadget")
        assert first["id"] < second["id"]
        assert first["name"] == "Widget"
        assert first["created_at"].tzinfo is not None
        assert [r["id"] for r in repo.list()] == [first["id"], second["id"]]

    def test_update_keeps_created_at(self, repo):
        created = repo.create("X")
        updated = repo.update(created["id"], "Y")
        assert updated == {"id": created["id"], "name": "Y", "created_at": created["created_at"]}

    def test_update_missing_returns_none(self, repo):
        assert repo.update(99, "Nope") is None
        assert repo.list() == []

    def test_delete_is_idempotent(self, repo):
        created = repo.create("Gone")
        repo.delete(created["id"])
        repo.delete(created["id"])
        assert repo.list() == []

    def test_ids_not_reused_after_delete(self, repo):
        created = repo.create("A")
        repo.delete(created["id"])
        assert repo.create("B")["id"] > created["id"]

    def test_ping(self, repo):
        repo.ping()

    def test_driver_errors_become_upstream_errors(self, repo, tmp_path):
        with sqlite3.connect(str(tmp_path / "nested" / "records.db")) as conn:
            conn.execute("DROP TABLE data")
        with pytest.raises(UpstreamError) as exc_info:
            repo.list()
        assert "no such table" in exc_info.value.message

    def test_rejects_invalid_table_name(self, tmp_path):
        with pytest.raises(ValueError):
            SQLiteRepository(str(tmp_path / "x.db"), table="data; DROP TABLE x")
