from __future__ import annotations

from fastapi import APIRouter, Depends

from ..repositories import Repository, get_repository
from ..schemas import (
    ErrorResponse,
    MessageResponse,
    RecordIn,
    RecordListResponse,
    RecordOut,
    RecordResponse,
)

router = APIRouter(
    prefix="/api/data",
    tags=["data"],
)

_error_responses = {
    500: {"model": ErrorResponse, "description": "Database error, message passed through"},
}
_validation_responses = {
    400: {"model": ErrorResponse, "description": "Missing or blank name"},
    **_error_responses,
}


def _get_repo(repo: Repository = Depends(get_repository)) -> Repository:
    """
    Dependency wrapper for repository to keep signatures clean.
    """
    return repo


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=RecordListResponse,
    summary="List Records",
    description="Return the full collection ordered by id ascending.",
    responses=_error_responses,
)
def list_records(repo: Repository = Depends(_get_repo)) -> RecordListResponse:
    """
    List every record.
    """
    items = repo.list()
    return RecordListResponse(data=[RecordOut(**it) for it in items])


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=RecordResponse,
    summary="Create Record",
    description="Insert a record and return it with its assigned id and created_at.",
    responses=_validation_responses,
)
def create_record(payload: RecordIn, repo: Repository = Depends(_get_repo)) -> RecordResponse:
    """
    Create a new record. Repeating the same name creates another record.
    """
    created = repo.create(payload.name)
    return RecordResponse(data=RecordOut(**created))


# PUBLIC_INTERFACE
@router.put(
    "/{record_id}",
    response_model=RecordResponse,
    summary="Rename Record",
    description=(
        "Set the name of an existing record. When no record has the given id the "
        "request still succeeds and data is null."
    ),
    responses=_validation_responses,
)
def update_record(record_id: int, payload: RecordIn, repo: Repository = Depends(_get_repo)) -> RecordResponse:
    """
    Rename a record; only the name is mutable.
    """
    updated = repo.update(record_id, payload.name)
    return RecordResponse(data=RecordOut(**updated) if updated else None)


# PUBLIC_INTERFACE
@router.delete(
    "/{record_id}",
    response_model=MessageResponse,
    summary="Delete Record",
    description="Delete a record by id. Deleting an absent id also succeeds.",
    responses=_error_responses,
)
def delete_record(record_id: int, repo: Repository = Depends(_get_repo)) -> MessageResponse:
    """
    Delete a record.
    """
    repo.delete(record_id)
    return MessageResponse(message="Deleted successfully")
