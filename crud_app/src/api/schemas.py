from __future__ import annotations

from datetime import datetime
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# PUBLIC_INTERFACE
class RecordIn(BaseModel):
    """
    Request body for creating or renaming a record.
    """

    model_config = ConfigDict(json_schema_extra={"example": {"name": "Widget"}})

    name: str = Field(..., description="Display name of the record", min_length=1)

    @field_validator("name", mode="before")
    @classmethod
    def coerce_number(cls, v: Any) -> Any:
        """
        Accept non-zero numbers as names, stored in their text form. Zero,
        booleans, null and structured values are still rejected.
        """
        if isinstance(v, (int, float)) and not isinstance(v, bool) and v:
            return str(v)
        return v

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """
        Reject blank names. The submitted value is stored as given.
        """
        if not v.strip():
            raise ValueError("name must not be blank")
        return v


# PUBLIC_INTERFACE
class RecordOut(BaseModel):
    """
    Schema returned by the API for a record.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "name": "Widget",
                "created_at": "2025-01-25T10:15:30.123456+00:00",
            }
        }
    )

    id: int = Field(..., description="Unique identifier assigned by the database")
    name: str = Field(..., description="Display name of the record")
    created_at: datetime = Field(..., description="Creation timestamp")


class OkEnvelope(BaseModel):
    status: Literal["ok"] = Field("ok", description="Outcome discriminator")


# PUBLIC_INTERFACE
class MessageResponse(OkEnvelope):
    """Success envelope carrying an informational message."""

    message: str = Field(..., description="Human readable outcome")


# PUBLIC_INTERFACE
class RecordListResponse(OkEnvelope):
    """Success envelope for the full collection, ordered by id ascending."""

    data: List[RecordOut] = Field(..., description="All records")


# PUBLIC_INTERFACE
class RecordResponse(OkEnvelope):
    """
    Success envelope for a single record. ``data`` is null when an update
    matched no row.
    """

    data: Optional[RecordOut] = Field(..., description="The affected record")


# PUBLIC_INTERFACE
class ErrorResponse(BaseModel):
    """Envelope returned for validation and database failures."""

    model_config = ConfigDict(
        json_schema_extra={"example": {"status": "error", "message": "Name is required"}}
    )

    status: Literal["error"] = Field("error", description="Outcome discriminator")
    message: str = Field(..., description="Failure reason")
