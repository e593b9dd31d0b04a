"""Vehicle endpoints."""

from typing import List, Optional, Tuple, Union

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from ....application.errors import ErrorKind, MalformedRequestError, VehicleServiceError
from ....application.services.vehicle_service import VehicleService
from ....domain.entities.vehicle import Vehicle
from ....infrastructure.logging import get_logger
from ....infrastructure.services import get_vehicle_service
from ..errors import VEHICLE_NOT_FOUND_MESSAGE, error_message_response, error_response
from ..schemas.vehicle_schemas import ErrorResponse, VehicleRequest, VehicleResponse
from ..validation import VehicleValidator

router = APIRouter()
logger = get_logger(__name__)

VEHICLE_REQUEST_BODY = {
    "requestBody": {
        "required": True,
        "content": {
            "application/json": {"schema": VehicleRequest.model_json_schema(by_alias=True)}
        },
    }
}


async def _parse_vehicle(request: Request) -> Tuple[Optional[Vehicle], Optional[JSONResponse]]:
    """Validate a vehicle request body.

    Returns the vehicle, or the error response to send instead. A body that
    is not a JSON object is reported before any field validation runs.
    """
    body = await request.body()

    try:
        result = VehicleValidator.validate_json(body)
    except MalformedRequestError as e:
        logger.info(f"Malformed vehicle body: {request.method} {request.url.path}")
        return None, error_message_response(e.kind, e.message)

    if not result.is_ok:
        logger.info(
            f"Vehicle validation failed: {request.method} {request.url.path}",
            extra={"field_errors": result.errors}
        )
        return None, error_response(ErrorKind.VALIDATION, result.errors)

    return result.vehicle, None


@router.get("", response_model=List[VehicleResponse])
async def list_vehicles(
    service: VehicleService = Depends(get_vehicle_service)
) -> List[VehicleResponse]:
    """List all vehicles."""
    vehicles = await service.get_all_vehicles()
    return [VehicleResponse.from_entity(vehicle) for vehicle in vehicles]


@router.post(
    "",
    response_model=VehicleResponse,
    status_code=status.HTTP_201_CREATED,
    openapi_extra=VEHICLE_REQUEST_BODY,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_409_CONFLICT: {"model": ErrorResponse},
    }
)
async def create_vehicle(
    request: Request,
    service: VehicleService = Depends(get_vehicle_service)
) -> Union[VehicleResponse, JSONResponse]:
    """Create new vehicle."""
    vehicle, error = await _parse_vehicle(request)
    if error is not None:
        return error

    try:
        created_vehicle = await service.create_vehicle(vehicle)
    except VehicleServiceError as e:
        return error_message_response(e.kind, e.message)

    return VehicleResponse.from_entity(created_vehicle)


@router.get(
    "/{vin}",
    response_model=VehicleResponse,
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}
)
async def get_vehicle(
    vin: str,
    service: VehicleService = Depends(get_vehicle_service)
) -> Union[VehicleResponse, JSONResponse]:
    """Get vehicle by VIN."""
    vehicle = await service.get_vehicle_by_vin(vin)
    if vehicle is None:
        return error_message_response(ErrorKind.NOT_FOUND, VEHICLE_NOT_FOUND_MESSAGE)

    return VehicleResponse.from_entity(vehicle)


@router.put(
    "/{vin}",
    response_model=VehicleResponse,
    openapi_extra=VEHICLE_REQUEST_BODY,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    }
)
async def update_vehicle(
    vin: str,
    request: Request,
    service: VehicleService = Depends(get_vehicle_service)
) -> Union[VehicleResponse, JSONResponse]:
    """Update an existing vehicle. The VIN in the path addresses the record."""
    vehicle, error = await _parse_vehicle(request)
    if error is not None:
        return error

    updated_vehicle = await service.update_vehicle(vin, vehicle)
    if updated_vehicle is None:
        return error_message_response(ErrorKind.NOT_FOUND, VEHICLE_NOT_FOUND_MESSAGE)

    return VehicleResponse.from_entity(updated_vehicle)


@router.delete("/{vin}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_vehicle(
    vin: str,
    service: VehicleService = Depends(get_vehicle_service)
) -> Response:
    """Delete vehicle by VIN."""
    await service.delete_vehicle(vin)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
