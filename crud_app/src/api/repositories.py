from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from functools import lru_cache
from threading import RLock
from typing import List, Optional

from .models import RecordEntity
from .settings import get_settings

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class Repository(ABC):
    """
    Abstract repository contract for record storage backends.

    Every method performs exactly one database call and raises
    ``UpstreamError`` when that call fails. Nothing is retried.
    """

    @abstractmethod
    def ping(self) -> None:
        """Check that the database is reachable. Raise UpstreamError otherwise."""

    @abstractmethod
    def list(self) -> List[RecordEntity]:
        """Return every record ordered by id ascending."""

    @abstractmethod
    def create(self, name: str) -> RecordEntity:
        """Insert a record and return it with its assigned id and created_at."""

    @abstractmethod
    def update(self, record_id: int, name: str) -> Optional[RecordEntity]:
        """Rename a record. Return the updated record, or None if no row matched."""

    @abstractmethod
    def delete(self, record_id: int) -> None:
        """Delete a record. Deleting an absent id is not an error."""

    def close(self) -> None:
        """Release connections held by the backend. No-op by default."""


class InMemoryRepository(Repository):
    """
    Thread-safe in-memory repository suitable for testing and default runtime.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._items: dict[int, RecordEntity] = {}
        self._next_id = 1

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    def _allocate_id(self) -> int:
        with self._lock:
            i = self._next_id
            self._next_id += 1
            return i

    def ping(self) -> None:
        return None

    def list(self) -> List[RecordEntity]:
        with self._lock:
            # Return copies to avoid external mutation
            return [self._items[k].copy() for k in sorted(self._items)]

    def create(self, name: str) -> RecordEntity:
        entity: RecordEntity = {
            "id": self._allocate_id(),
            "name": name,
            "created_at": self._now(),
        }
        with self._lock:
            self._items[entity["id"]] = entity
        return entity.copy()

    def update(self, record_id: int, name: str) -> Optional[RecordEntity]:
        with self._lock:
            existing = self._items.get(record_id)
            if existing is None:
                return None
            updated = existing.copy()
            updated["name"] = name
            self._items[record_id] = updated
            return updated.copy()

    def delete(self, record_id: int) -> None:
        with self._lock:
            self._items.pop(record_id, None)


# PUBLIC_INTERFACE
@lru_cache(maxsize=1)
def get_repository() -> Repository:
    """
    Return the process-wide repository for the configured backend.
    - memory: InMemoryRepository
    - sqlite: SQLiteRepository (file database via sqlite3)
    - postgrest: PostgrestRepository (hosted database over its REST interface)
    """
    settings = get_settings()
    logger.info("Using %s persistence backend", settings.persistence_backend)
    if settings.persistence_backend == "sqlite":
        from .db import SQLiteRepository

        return SQLiteRepository(settings.sqlite_db_path, table=settings.data_table)
    if settings.persistence_backend == "postgrest":
        from .postgrest import PostgrestRepository

        return PostgrestRepository.from_settings(settings)
    return InMemoryRepository()


# PUBLIC_INTERFACE
def close_repository() -> None:
    """Close the process-wide repository if one was created, and forget it."""
    if get_repository.cache_info().currsize:
        get_repository().close()
    get_repository.cache_clear()
