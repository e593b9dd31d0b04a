"""In-memory repository implementations for testing and development."""

from typing import List, Optional, Dict

from src.vehicle_service.application.ports.repositories import VehicleRepository
from src.vehicle_service.domain.entities.vehicle import Vehicle


class InMemoryVehicleRepository(VehicleRepository):
    """In-memory implementation of vehicle repository."""

    def __init__(self):
        self._vehicles: Dict[str, Vehicle] = {}

    async def exists(self, vin: str) -> bool:
        """Check if a vehicle exists."""
        return vin in self._vehicles

    async def find_by_id(self, vin: str) -> Optional[Vehicle]:
        """Find vehicle by VIN."""
        return self._vehicles.get(vin)

    async def find_all(self) -> List[Vehicle]:
        """Find all vehicles."""
        return list(self._vehicles.values())

    async def save(self, vehicle: Vehicle) -> Vehicle:
        """Save a vehicle."""
        self._vehicles[vehicle.vin] = vehicle
        return vehicle

    async def delete_by_id(self, vin: str) -> None:
        """Delete a vehicle."""
        self._vehicles.pop(vin, None)

    def clear(self) -> None:
        """Remove every stored vehicle."""
        self._vehicles.clear()
