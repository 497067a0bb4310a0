from __future__ import annotations

from typing import Any, Dict, Sequence

NAME_REQUIRED = "Name is required"
VALIDATION_FAILED = "Request validation failed"


# PUBLIC_INTERFACE
def error_envelope(message: str) -> Dict[str, Any]:
    """
    Build the JSON body returned for every failed request.

    Returns:
        Dict with keys: status ("error"), message.
    """
    return {"status": "error", "message": message}


# PUBLIC_INTERFACE
def validation_message(errors: Sequence[Dict[str, Any]]) -> str:
    """
    Pick the client-facing message for a list of request validation errors.

    Any failure located in the request body means the record name was missing,
    blank or not a string; everything else (e.g. a non-integer path id) gets the
    generic message.
    """
    for err in errors:
        loc = err.get("loc") or ()
        if loc and loc[0] == "body":
            return NAME_REQUIRED
    return VALIDATION_FAILED
