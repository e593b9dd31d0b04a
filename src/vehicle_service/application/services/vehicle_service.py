"""Vehicle service implementing use cases for vehicle management."""

from typing import List, Optional, TYPE_CHECKING

from ..errors import ConflictError
from ..ports.repositories import DuplicateVehicleError
from ...domain.entities.vehicle import Vehicle
from src.vehicle_service.infrastructure.logging import (
    get_logger,
    log_business_rule_violation
)

if TYPE_CHECKING:
    from ..ports.repositories import VehicleRepository


VIN_ALREADY_EXISTS = "VIN already exists"


class VehicleService:
    """Application service for vehicle management."""

    def __init__(self, vehicle_repository: "VehicleRepository"):
        self._vehicle_repository = vehicle_repository
        self._logger = get_logger(__name__)

    async def create_vehicle(self, vehicle: Vehicle) -> Vehicle:
        """Create and persist a new vehicle.

        Raises:
            ConflictError: if a vehicle with the same VIN is already stored.
        """
        if await self._vehicle_repository.exists(vehicle.vin):
            log_business_rule_violation(
                self._logger,
                "unique_vin",
                f"Vehicle {vehicle.vin} already exists",
                vin=vehicle.vin
            )
            raise ConflictError(VIN_ALREADY_EXISTS)

        try:
            saved_vehicle = await self._vehicle_repository.save(vehicle)
        except DuplicateVehicleError as e:
            # Lost a race against a concurrent create for the same VIN
            log_business_rule_violation(
                self._logger,
                "unique_vin",
                f"Datastore rejected duplicate vehicle {vehicle.vin}",
                vin=vehicle.vin
            )
            raise ConflictError(VIN_ALREADY_EXISTS) from e

        self._logger.info(f"Created vehicle {saved_vehicle.vin}")
        return saved_vehicle

    async def update_vehicle(self, vin: str, vehicle: Vehicle) -> Optional[Vehicle]:
        """Overwrite every mutable field of an existing vehicle.

        Returns None when no vehicle is stored under the VIN.
        """
        existing_vehicle = await self._vehicle_repository.find_by_id(vin)
        if existing_vehicle is None:
            self._logger.debug(f"Update skipped, vehicle {vin} not found")
            return None

        existing_vehicle.update_details(vehicle)
        updated_vehicle = await self._vehicle_repository.save(existing_vehicle)

        self._logger.info(f"Updated vehicle {vin}")
        return updated_vehicle

    async def get_all_vehicles(self) -> List[Vehicle]:
        """Get all vehicles."""
        return await self._vehicle_repository.find_all()

    async def get_vehicle_by_vin(self, vin: str) -> Optional[Vehicle]:
        """Get a specific vehicle by VIN."""
        return await self._vehicle_repository.find_by_id(vin)

    async def delete_vehicle(self, vin: str) -> None:
        """Delete a vehicle. Absence of the vehicle is not an error."""
        await self._vehicle_repository.delete_by_id(vin)
        self._logger.info(f"Deleted vehicle {vin}")
