from __future__ import annotations

from datetime import datetime
from typing import TypedDict


# PUBLIC_INTERFACE
class RecordEntity(TypedDict):
    """
    A row of the single records collection as returned by storage backends.

    Fields:
    - id: Unique integer identifier assigned by the backend
    - name: Non-empty display name, the only mutable field
    - created_at: Insertion timestamp, never modified afterwards
    """

    id: int
    name: str
    created_at: datetime
