"""Translation of application error kinds into HTTP responses."""

from typing import Dict

from fastapi.responses import JSONResponse

from ...application.errors import ErrorKind

INTERNAL_ERROR_MESSAGE = "Internal server error"
VEHICLE_NOT_FOUND_MESSAGE = "Vehicle not found"

ERROR_STATUS_CODES: Dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 422,
    ErrorKind.MALFORMED_REQUEST: 400,
    ErrorKind.CONFLICT: 409,
    ErrorKind.NOT_FOUND: 404,
}


def error_response(kind: ErrorKind, content: Dict[str, str]) -> JSONResponse:
    """Build the JSON response for an error kind."""
    return JSONResponse(status_code=ERROR_STATUS_CODES[kind], content=content)


def error_message_response(kind: ErrorKind, message: str) -> JSONResponse:
    """Build an `{"error": message}` response for an error kind."""
    return error_response(kind, {"error": message})
