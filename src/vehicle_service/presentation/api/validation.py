"""Validation of vehicle request bodies."""

from typing import Any, Dict, List, Union

from pydantic import ValidationError

from ...application.errors import MalformedRequestError
from ...domain.entities.vehicle import FuelType
from ...domain.value_objects.validation_result import ValidationResult
from .schemas.vehicle_schemas import (
    MAX_HORSE_POWER,
    PRICE_DECIMAL_PLACES,
    PRICE_MAX_DIGITS,
    VehicleRequest
)

FIELD_LABELS = {
    "vin": "VIN",
    "manufacturerName": "Manufacturer name",
    "description": "Description",
    "horsePower": "Horsepower",
    "modelName": "Model name",
    "purchasePrice": "Purchase price",
    "fuelType": "Fuel type",
}

PRICE_PRECISION_MESSAGE = (
    f"Purchase price must have at most {PRICE_DECIMAL_PLACES} decimal places "
    f"and {PRICE_MAX_DIGITS} digits"
)

# Error types that mean "no usable value was supplied"
_MISSING_VALUE_TYPES = {"missing", "string_too_short", "string_blank"}

_CONSTRAINT_MESSAGES = {
    ("horsePower", "greater_than_equal"): "Horsepower must be greater than 0",
    ("horsePower", "less_than_equal"): f"Horsepower must not exceed {MAX_HORSE_POWER}",
    ("purchasePrice", "greater_than_equal"): "Price cannot be negative",
    ("purchasePrice", "decimal_max_digits"): PRICE_PRECISION_MESSAGE,
    ("purchasePrice", "decimal_max_places"): PRICE_PRECISION_MESSAGE,
    ("purchasePrice", "decimal_whole_digits"): PRICE_PRECISION_MESSAGE,
}

_TYPE_MESSAGES = {
    "vin": "VIN must be a string",
    "manufacturerName": "Manufacturer name must be a string",
    "description": "Description must be a string",
    "modelName": "Model name must be a string",
    "horsePower": "Horsepower must be an integer",
    "purchasePrice": "Purchase price must be a number",
    "fuelType": f"Fuel type must be one of {', '.join(FuelType.__members__)}",
}


class VehicleValidator:
    """Validates a JSON request body against VehicleRequest.

    Field problems come back as a failed ValidationResult keyed by the JSON
    field name, all fields at once. A body that is not a JSON object at all
    raises MalformedRequestError instead.
    """

    @classmethod
    def validate_json(cls, body: Union[str, bytes]) -> ValidationResult:
        """Validate a raw request body and build a vehicle from it.

        An empty body is validated as an empty object.

        Raises:
            MalformedRequestError: if the body is not valid JSON or its top
                level is not an object.
        """
        if not body.strip():
            body = "{}"

        try:
            request = VehicleRequest.model_validate_json(body)
        except ValidationError as e:
            errors = e.errors()
            # Errors without a field location concern the document itself
            if any(not error["loc"] for error in errors):
                raise MalformedRequestError() from e
            return ValidationResult.failed(cls._field_messages(errors))

        return ValidationResult.ok(request.to_entity())

    @classmethod
    def _field_messages(cls, errors: List[Dict[str, Any]]) -> Dict[str, str]:
        messages: Dict[str, str] = {}
        for error in errors:
            field = str(error["loc"][0])
            if field in FIELD_LABELS:
                messages.setdefault(field, cls._message_for(field, error))
        return messages

    @staticmethod
    def _message_for(field: str, error: Dict[str, Any]) -> str:
        if error["type"] in _MISSING_VALUE_TYPES or error.get("input") is None:
            return f"{FIELD_LABELS[field]} is required"
        if error["type"] == "string_too_long":
            return f"{FIELD_LABELS[field]} must be at most {error['ctx']['max_length']} characters"
        return _CONSTRAINT_MESSAGES.get((field, error["type"]), _TYPE_MESSAGES[field])
