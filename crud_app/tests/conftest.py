import os

import pytest

# Ensure we default to memory backend for tests to avoid filesystem and network dependencies
os.environ["PERSISTENCE_BACKEND"] = "memory"
os.environ["FRONTEND_URL"] = "http://localhost:5173"

from src.api.main import app  # noqa: E402
from src.api.repositories import get_repository  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_repository():
    """Start every test with an empty in-memory collection and no overrides."""
    get_repository.cache_clear()
    app.dependency_overrides.clear()
    yield
    app.dependency_overrides.clear()
    get_repository.cache_clear()
