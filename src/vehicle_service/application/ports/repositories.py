"""Port interfaces for repositories (Dependency Inversion Principle)."""

from abc import ABC, abstractmethod
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from src.vehicle_service.domain.entities.vehicle import Vehicle


class DuplicateVehicleError(Exception):
    """Raised by a repository when the datastore rejects a duplicate VIN."""

    def __init__(self, vin: str):
        super().__init__(f"Vehicle with VIN {vin} already stored")
        self.vin = vin


class VehicleRepository(ABC):
    """Port interface for vehicle repository."""

    @abstractmethod
    async def exists(self, vin: str) -> bool:
        """Check if a vehicle exists."""
        raise NotImplementedError

    @abstractmethod
    async def find_by_id(self, vin: str) -> Optional["Vehicle"]:
        """Find vehicle by VIN."""
        raise NotImplementedError

    @abstractmethod
    async def find_all(self) -> List["Vehicle"]:
        """Find all vehicles."""
        raise NotImplementedError

    @abstractmethod
    async def save(self, vehicle: "Vehicle") -> "Vehicle":
        """Save a vehicle (insert if absent, otherwise overwrite)."""
        raise NotImplementedError

    @abstractmethod
    async def delete_by_id(self, vin: str) -> None:
        """Delete a vehicle. Deleting an absent VIN is a no-op."""
        raise NotImplementedError
