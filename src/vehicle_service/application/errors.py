"""Error kinds raised by the application layer."""

from enum import Enum


class ErrorKind(Enum):
    """Kinds of failure a vehicle request can end in."""
    VALIDATION = "validation"
    MALFORMED_REQUEST = "malformed_request"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"


class VehicleServiceError(Exception):
    """Base error for business failures, tagged with its kind."""

    kind: ErrorKind

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


class ConflictError(VehicleServiceError):
    """Raised when a create would break VIN uniqueness."""

    def __init__(self, message: str = "VIN already exists"):
        super().__init__(ErrorKind.CONFLICT, message)


class MalformedRequestError(VehicleServiceError):
    """Raised when a request body is not a JSON object."""

    def __init__(self, message: str = "Malformed JSON request"):
        super().__init__(ErrorKind.MALFORMED_REQUEST, message)
