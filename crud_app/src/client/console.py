"""
Console front-end for the records view.

Usage:
    python -m src.client [--api-url http://localhost:5000]

Commands: fetch, add <name>, edit <id>, save <name>, cancel, delete <id>, help, quit
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import click
import httpx

from .api import ApiClient
from .config import get_client_settings
from .view_model import ADD_ACTION, DataViewModel

HELP = "Commands: fetch | add <name> | edit <id> | save <name> | cancel | delete <id> | help | quit"


def _format_date(value: Any) -> str:
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        return str(value)


def _row(vm: DataViewModel, item: Dict[str, Any]) -> str:
    record_id = item["id"]
    if vm.editing_id == record_id:
        name = f"[{vm.edit_value}]"
        actions = "saving..." if vm.is_busy(record_id) else "save | cancel"
    else:
        name = str(item["name"])
        actions = "deleting..." if vm.is_busy(record_id) else "edit | delete"
    return f"{record_id:<6} {name:<30} {_format_date(item['created_at']):<12} {actions}"


# PUBLIC_INTERFACE
def render(vm: DataViewModel) -> str:
    """Render the current view-model state as text."""
    status = "Loading..." if vm.loading else vm.backend_status
    marker = "ok" if vm.is_connected else "error"
    lines: List[str] = [f"Backend: {status} ({marker})"]
    if vm.show_add_form:
        state = "Saving..." if vm.is_busy(ADD_ACTION) else "open"
        lines.append(f"Add form: {state} [{vm.new_name}]")
    if vm.show_data:
        lines.append(f"Results ({len(vm.data)} items)")
        if not vm.data:
            lines.append("No data found in the database")
        else:
            lines.append(f"{'ID':<6} {'Name':<30} {'Created At':<12} Actions")
            lines.extend(_row(vm, item) for item in vm.data)
    return "\n".join(lines)


def _parse_id(arg: str) -> Optional[int]:
    try:
        return int(arg)
    except ValueError:
        click.echo(f"Not a valid id: {arg!r}")
        return None


# PUBLIC_INTERFACE
def dispatch(vm: DataViewModel, line: str) -> bool:
    """Apply one console command to the view-model. Return False to stop."""
    command, _, arg = line.strip().partition(" ")
    command = command.lower()
    arg = arg.strip()

    if command in {"quit", "exit", "q"}:
        return False
    if command == "fetch":
        vm.fetch_data()
    elif command == "add":
        vm.show_add_form = True
        vm.new_name = arg
        vm.add()
    elif command == "edit":
        record_id = _parse_id(arg)
        if record_id is None:
            return True
        record = next((r for r in vm.data if r["id"] == record_id), None)
        if record is None:
            click.echo("No such row; fetch first")
        else:
            vm.start_edit(record)
    elif command == "save":
        if vm.editing_id is None:
            click.echo("Nothing is being edited")
        else:
            vm.edit_value = arg
            vm.save(vm.editing_id)
    elif command == "cancel":
        vm.cancel_edit()
    elif command == "delete":
        record_id = _parse_id(arg)
        if record_id is not None:
            vm.delete(record_id)
    elif command in {"help", "?"}:
        click.echo(HELP)
        return True
    elif command:
        click.echo(f"Unknown command: {command}. {HELP}")
        return True
    click.echo(render(vm))
    return True


def _notify(message: str) -> None:
    click.echo(f"! {message}")


def _confirm(message: str) -> bool:
    return click.confirm(message, default=False)


@click.command()
@click.option("--api-url", default=None, help="Base URL of the data service (defaults to API_URL).")
@click.option("--verbose", "-v", is_flag=True, help="Show diagnostic logging.")
def main(api_url: Optional[str], verbose: bool) -> None:
    """Manage the records collection from the terminal."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.CRITICAL)
    settings = get_client_settings()
    if api_url:
        api = ApiClient(httpx.Client(base_url=api_url.rstrip("/"), timeout=settings.timeout_seconds))
    else:
        api = ApiClient()

    vm = DataViewModel(api, notify=_notify, confirm=_confirm)
    vm.check_backend_connection()
    click.echo(render(vm))
    click.echo(HELP)
    try:
        while dispatch(vm, click.prompt(">", default="", show_default=False)):
            pass
    finally:
        api.close()
