"""
View-model for the records screen.

Holds the per-session presentation state (connection status, loaded records,
which row is being edited, which action is in flight) and the actions a user
can trigger. Rendering is left to a front-end; blocking notices and delete
confirmations go through the injected ``notify`` and ``confirm`` callables.

Every successful create, update or delete is followed by a full reload of the
collection, never by a local patch.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Union

from .api import ApiClient, TransportError

logger = logging.getLogger(__name__)

ADD_ACTION = "add"

ActionKey = Union[int, str]
Notify = Callable[[str], None]
Confirm = Callable[[str], bool]


# PUBLIC_INTERFACE
class DataViewModel:
    """State and actions of the single records view."""

    def __init__(self, api: ApiClient, notify: Notify, confirm: Confirm) -> None:
        self._api = api
        self._notify = notify
        self._confirm = confirm

        self.backend_status: str = "Checking..."
        self.loading: bool = True
        self.data: List[Dict[str, Any]] = []
        self.data_loading: bool = False
        self.show_data: bool = False
        self.editing_id: Optional[int] = None
        self.edit_value: str = ""
        self.show_add_form: bool = False
        self.new_name: str = ""
        self.action_loading: Optional[ActionKey] = None

    @property
    def is_connected(self) -> bool:
        return "connected" in self.backend_status.lower()

    def is_busy(self, key: ActionKey) -> bool:
        """True while the action for ``key`` (a record id or "add") is in flight."""
        return self.action_loading == key

    # PUBLIC_INTERFACE
    def check_backend_connection(self) -> None:
        """Run the health check once; the status is never re-checked automatically."""
        try:
            response = self._api.get("/api/health")
            self.backend_status = response.get("message") or "Connected!"
        except TransportError as e:
            self.backend_status = "Failed to connect to backend"
            logger.error("Backend connection error: %s", e)
        finally:
            self.loading = False

    # PUBLIC_INTERFACE
    def fetch_data(self) -> None:
        """Replace the local collection with the server's and make it visible."""
        self.data_loading = True
        try:
            response = self._api.get("/api/data")
            self.data = response.get("data") or []
            self.show_data = True
        except TransportError as e:
            logger.error("Error fetching data: %s", e)
            self._notify("Failed to fetch data from database")
        finally:
            self.data_loading = False

    def toggle_add_form(self) -> None:
        self.show_add_form = not self.show_add_form

    # PUBLIC_INTERFACE
    def add(self) -> None:
        """Create a record from ``new_name``, then reload the collection."""
        if not self.new_name.strip():
            self._notify("Please enter a name")
            return
        self.action_loading = ADD_ACTION
        try:
            self._api.post("/api/data", {"name": self.new_name})
            self.new_name = ""
            self.show_add_form = False
            self.fetch_data()
        except TransportError as e:
            logger.error("Error adding data: %s", e)
            self._notify("Failed to add data")
        finally:
            self.action_loading = None

    def start_edit(self, record: Dict[str, Any]) -> None:
        """
        Make ``record`` the editable row. Unsaved text of a previously edited
        row is discarded.
        """
        self.editing_id = record["id"]
        self.edit_value = record["name"]

    # PUBLIC_INTERFACE
    def save(self, record_id: int) -> None:
        """Send ``edit_value`` as the new name of ``record_id``, then reload."""
        if not self.edit_value.strip():
            self._notify("Please enter a name")
            return
        self.action_loading = record_id
        try:
            self._api.put(f"/api/data/{record_id}", {"name": self.edit_value})
            self.editing_id = None
            self.edit_value = ""
            self.fetch_data()
        except TransportError as e:
            logger.error("Error updating data: %s", e)
            self._notify("Failed to update data")
        finally:
            self.action_loading = None

    def cancel_edit(self) -> None:
        self.editing_id = None
        self.edit_value = ""

    # PUBLIC_INTERFACE
    def delete(self, record_id: int) -> None:
        """Delete ``record_id`` after confirmation, then reload."""
        if not self._confirm("Are you sure you want to delete this item?"):
            return
        self.action_loading = record_id
        try:
            self._api.delete(f"/api/data/{record_id}")
            self.fetch_data()
        except TransportError as e:
            logger.error("Error deleting data: %s", e)
            self._notify("Failed to delete data")
        finally:
            self.action_loading = None
