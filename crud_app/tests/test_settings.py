import json
import logging

from src.api.generate_openapi import generate_openapi
from src.api.logging_config import setup_logging
from src.api.settings import get_settings
from src.client.config import get_client_settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ["PORT", "HOST", "FRONTEND_URL", "SQLITE_DB_PATH", "DATA_TABLE", "UPSTREAM_TIMEOUT_SECONDS", "LOG_LEVEL"]:
            monkeypatch.delenv(name, raising=False)
        settings = get_settings()
        assert settings.port == 5000
        assert settings.host == "0.0.0.0"
        assert settings.frontend_url == "http://localhost:5173"
        assert settings.persistence_backend == "memory"
        assert settings.data_table == "data"
        assert settings.upstream_timeout_seconds == 10.0
        assert settings.log_level == "INFO"

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("FRONTEND_URL", "https://app.example.com/")
        monkeypatch.setenv("PERSISTENCE_BACKEND", "SQLite")
        monkeypatch.setenv("UPSTREAM_TIMEOUT_SECONDS", "2.5")
        settings = get_settings()
        assert settings.port == 8080
        assert settings.frontend_url == "https://app.example.com"
        assert settings.persistence_backend == "sqlite"
        assert settings.upstream_timeout_seconds == 2.5

    def test_invalid_values_fall_back(self, monkeypatch):
        monkeypatch.setenv("PORT", "not-a-port")
        monkeypatch.setenv("PERSISTENCE_BACKEND", "mongo")
        monkeypatch.setenv("UPSTREAM_TIMEOUT_SECONDS", "-1")
        settings = get_settings()
        assert settings.port == 5000
        assert settings.persistence_backend == "memory"
        assert settings.upstream_timeout_seconds == 10.0

    def test_client_settings(self, monkeypatch):
        monkeypatch.delenv("API_URL", raising=False)
        assert get_client_settings().api_url == "http://localhost:5000"
        monkeypatch.setenv("API_URL", "https://api.example.com/")
        assert get_client_settings().api_url == "https://api.example.com"


class TestLogging:
    def test_setup_logging_sets_level_once(self):
        root = logging.getLogger()
        level, before = root.level, len(root.handlers)
        try:
            setup_logging("DEBUG")
            setup_logging("warning")
            assert root.level == logging.WARNING
            assert len(root.handlers) == max(before, 1)
        finally:
            root.setLevel(level)


class TestOpenAPI:
    def test_generate_openapi(self, tmp_path):
        out = generate_openapi(str(tmp_path / "interfaces" / "openapi.json"))
        with open(out, encoding="utf-8") as f:
            schema = json.load(f)
        assert {"/", "/api/health", "/api/data", "/api/data/{record_id}"} <= set(schema["paths"])
        assert {t["name"] for t in schema["tags"]} == {"health", "data"}
        assert "400" in schema["paths"]["/api/data"]["post"]["responses"]
