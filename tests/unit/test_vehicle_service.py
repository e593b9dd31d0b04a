"""Unit tests for vehicle service application layer."""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock

from src.vehicle_service.application.errors import ConflictError, ErrorKind
from src.vehicle_service.application.ports.repositories import DuplicateVehicleError
from src.vehicle_service.application.services.vehicle_service import VehicleService
from src.vehicle_service.domain.entities.vehicle import FuelType, Vehicle
from src.vehicle_service.infrastructure.repositories.memory_repositories import InMemoryVehicleRepository


def make_vehicle(vin: str = "TEST-VIN-100", **overrides) -> Vehicle:
    """Build a vehicle with sensible defaults."""
    fields = {
        "manufacturer_name": "Toyota",
        "description": "Sedan",
        "horse_power": 203,
        "model_name": "Camry",
        "purchase_price": Decimal("25000.00"),
        "fuel_type": FuelType.GASOLINE,
    }
    fields.update(overrides)
    return Vehicle(vin=vin, **fields)


class TestVehicleServiceWithMocks:
    """Test cases for VehicleService against a mocked repository."""

    def setup_mocks(self):
        """Set up mock repository for testing."""
        self.mock_vehicle_repo = AsyncMock()
        self.service = VehicleService(self.mock_vehicle_repo)

    def test_service_initialization(self):
        """Test vehicle service initialization."""
        self.setup_mocks()

        assert self.service._vehicle_repository == self.mock_vehicle_repo

    @pytest.mark.asyncio
    async def test_create_vehicle_saves_when_vin_is_unique(self):
        """Test create persists a new vehicle."""
        self.setup_mocks()
        vehicle = make_vehicle("TEST_VIN")
        self.mock_vehicle_repo.exists.return_value = False
        self.mock_vehicle_repo.save.return_value = vehicle

        result = await self.service.create_vehicle(vehicle)

        assert result == vehicle
        self.mock_vehicle_repo.exists.assert_called_once_with("TEST_VIN")
        self.mock_vehicle_repo.save.assert_called_once_with(vehicle)

    @pytest.mark.asyncio
    async def test_create_vehicle_raises_conflict_when_vin_exists(self):
        """Test create rejects a duplicate VIN without saving."""
        self.setup_mocks()
        self.mock_vehicle_repo.exists.return_value = True

        with pytest.raises(ConflictError, match="VIN already exists") as exc_info:
            await self.service.create_vehicle(make_vehicle("DUPLICATE_VIN"))

        assert exc_info.value.kind == ErrorKind.CONFLICT
        self.mock_vehicle_repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_vehicle_maps_datastore_duplicate_to_conflict(self):
        """Test a primary-key violation from the datastore becomes a conflict."""
        self.setup_mocks()
        self.mock_vehicle_repo.exists.return_value = False
        self.mock_vehicle_repo.save.side_effect = DuplicateVehicleError("RACE_VIN")

        with pytest.raises(ConflictError, match="VIN already exists"):
            await self.service.create_vehicle(make_vehicle("RACE_VIN"))

    @pytest.mark.asyncio
    async def test_update_vehicle_overwrites_existing(self):
        """Test update copies fields onto the stored vehicle."""
        self.setup_mocks()
        old_vehicle = make_vehicle("EXISTING_VIN", manufacturer_name="OldName")
        new_details = make_vehicle("IGNORED_VIN", manufacturer_name="NewName")
        self.mock_vehicle_repo.find_by_id.return_value = old_vehicle
        self.mock_vehicle_repo.save.side_effect = lambda vehicle: vehicle

        result = await self.service.update_vehicle("EXISTING_VIN", new_details)

        assert result is not None
        assert result.manufacturer_name == "NewName"
        assert result.vin == "EXISTING_VIN"
        self.mock_vehicle_repo.find_by_id.assert_called_once_with("EXISTING_VIN")
        self.mock_vehicle_repo.save.assert_called_once_with(old_vehicle)

    @pytest.mark.asyncio
    async def test_update_vehicle_returns_none_when_missing(self):
        """Test update on an unknown VIN returns None and saves nothing."""
        self.setup_mocks()
        self.mock_vehicle_repo.find_by_id.return_value = None

        result = await self.service.update_vehicle("UNKNOWN-VIN", make_vehicle())

        assert result is None
        self.mock_vehicle_repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_all_vehicles(self):
        """Test listing delegates to the repository."""
        self.setup_mocks()
        self.mock_vehicle_repo.find_all.return_value = [make_vehicle()]

        vehicles = await self.service.get_all_vehicles()

        assert len(vehicles) == 1
        assert vehicles[0].vin == "TEST-VIN-100"
        self.mock_vehicle_repo.find_all.assert_called_once()

    @pytest.mark.asyncio
    async def test_get_vehicle_by_vin_found(self):
        """Test lookup returns the stored vehicle."""
        self.setup_mocks()
        self.mock_vehicle_repo.find_by_id.return_value = make_vehicle()

        result = await self.service.get_vehicle_by_vin("TEST-VIN-100")

        assert result.manufacturer_name == "Toyota"
        self.mock_vehicle_repo.find_by_id.assert_called_once_with("TEST-VIN-100")

    @pytest.mark.asyncio
    async def test_get_vehicle_by_vin_not_found(self):
        """Test lookup of an unknown VIN returns None."""
        self.setup_mocks()
        self.mock_vehicle_repo.find_by_id.return_value = None

        assert await self.service.get_vehicle_by_vin("UNKNOWN-VIN") is None

    @pytest.mark.asyncio
    async def test_delete_vehicle_calls_repository(self):
        """Test delete delegates to the repository."""
        self.setup_mocks()

        await self.service.delete_vehicle("TEST-VIN-100")

        self.mock_vehicle_repo.delete_by_id.assert_called_once_with("TEST-VIN-100")


class TestVehicleServiceWithInMemoryRepository:
    """Behavioural tests against the in-memory repository."""

    def setup_service(self):
        """Set up service with a fresh in-memory repository."""
        self.repository = InMemoryVehicleRepository()
        self.service = VehicleService(self.repository)

    @pytest.mark.asyncio
    async def test_create_twice_yields_conflict(self):
        """Test a second create with the same VIN fails."""
        self.setup_service()

        await self.service.create_vehicle(make_vehicle("V1"))
        with pytest.raises(ConflictError):
            await self.service.create_vehicle(make_vehicle("V1", model_name="Other"))

        stored = await self.service.get_vehicle_by_vin("V1")
        assert stored.model_name == "Camry"

    @pytest.mark.asyncio
    async def test_create_then_get_returns_equal_record(self):
        """Test a created vehicle reads back unchanged."""
        self.setup_service()
        vehicle = make_vehicle("V2", fuel_type=FuelType.ELECTRIC)

        await self.service.create_vehicle(vehicle)

        assert await self.service.get_vehicle_by_vin("V2") == make_vehicle("V2", fuel_type=FuelType.ELECTRIC)

    @pytest.mark.asyncio
    async def test_update_overwrites_all_fields_and_keeps_vin(self):
        """Test update replaces every non-VIN field."""
        self.setup_service()
        await self.service.create_vehicle(make_vehicle("V3"))
        changes = make_vehicle(
            "SOMETHING-ELSE",
            manufacturer_name="Tesla",
            description="Electric sedan",
            horse_power=283,
            model_name="Model 3",
            purchase_price=Decimal("39990"),
            fuel_type=FuelType.ELECTRIC
        )

        updated = await self.service.update_vehicle("V3", changes)

        assert updated == make_vehicle(
            "V3",
            manufacturer_name="Tesla",
            description="Electric sedan",
            horse_power=283,
            model_name="Model 3",
            purchase_price=Decimal("39990"),
            fuel_type=FuelType.ELECTRIC
        )
        assert await self.service.get_vehicle_by_vin("SOMETHING-ELSE") is None

    @pytest.mark.asyncio
    async def test_update_missing_vin_returns_none(self):
        """Test update does not create missing vehicles."""
        self.setup_service()

        assert await self.service.update_vehicle("MISSING", make_vehicle("MISSING")) is None
        assert await self.service.get_all_vehicles() == []

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self):
        """Test deleting twice never errors."""
        self.setup_service()
        await self.service.create_vehicle(make_vehicle("V4"))

        await self.service.delete_vehicle("V4")
        await self.service.delete_vehicle("V4")

        assert await self.service.get_vehicle_by_vin("V4") is None
