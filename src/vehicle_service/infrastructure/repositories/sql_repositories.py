"""SQLAlchemy repository implementations."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import select, delete, exists
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError

from src.vehicle_service.infrastructure.logging import (
    get_logger,
    log_database_operation
)

from src.vehicle_service.application.ports.repositories import DuplicateVehicleError, VehicleRepository
from src.vehicle_service.domain.entities.vehicle import Vehicle
from src.vehicle_service.infrastructure.database.models import VehicleModel


class SQLAlchemyVehicleRepository(VehicleRepository):
    """SQLAlchemy implementation of vehicle repository."""

    def __init__(self, session: AsyncSession):
        self._session = session
        self._logger = get_logger(__name__)

    async def exists(self, vin: str) -> bool:
        """Check if a vehicle exists."""
        log_database_operation(self._logger, "EXISTS", "vehicles", vin=vin)

        stmt = select(exists().where(VehicleModel.vin == vin))
        result = await self._session.execute(stmt)
        return bool(result.scalar())

    async def find_by_id(self, vin: str) -> Optional[Vehicle]:
        """Find vehicle by VIN."""
        log_database_operation(self._logger, "SELECT", "vehicles", vin=vin)

        stmt = select(VehicleModel).where(VehicleModel.vin == vin)
        result = await self._session.execute(stmt)
        vehicle_model = result.scalar_one_or_none()

        if not vehicle_model:
            return None

        return self._model_to_entity(vehicle_model)

    async def find_all(self) -> List[Vehicle]:
        """Find all vehicles."""
        log_database_operation(self._logger, "SELECT", "vehicles")

        stmt = select(VehicleModel).order_by(VehicleModel.vin)
        result = await self._session.execute(stmt)
        vehicle_models = result.scalars().all()

        return [self._model_to_entity(model) for model in vehicle_models]

    async def save(self, vehicle: Vehicle) -> Vehicle:
        """Save a vehicle to the database."""
        stmt = select(VehicleModel).where(VehicleModel.vin == vehicle.vin)
        result = await self._session.execute(stmt)
        existing_vehicle = result.scalar_one_or_none()

        if existing_vehicle:
            log_database_operation(self._logger, "UPDATE", "vehicles", vin=vehicle.vin)
            existing_vehicle.manufacturer_name = vehicle.manufacturer_name
            existing_vehicle.description = vehicle.description
            existing_vehicle.horse_power = vehicle.horse_power
            existing_vehicle.model_name = vehicle.model_name
            existing_vehicle.purchase_price = vehicle.purchase_price
            existing_vehicle.fuel_type = vehicle.fuel_type
            existing_vehicle.updated_at = datetime.utcnow()
        else:
            log_database_operation(self._logger, "INSERT", "vehicles", vin=vehicle.vin)
            vehicle_model = VehicleModel(
                vin=vehicle.vin,
                manufacturer_name=vehicle.manufacturer_name,
                description=vehicle.description,
                horse_power=vehicle.horse_power,
                model_name=vehicle.model_name,
                purchase_price=vehicle.purchase_price,
                fuel_type=vehicle.fuel_type,
                created_at=datetime.utcnow(),
                updated_at=datetime.utcnow()
            )
            self._session.add(vehicle_model)

        try:
            await self._session.flush()
        except IntegrityError as e:
            # The failed flush leaves the session unusable until rolled back
            await self._session.rollback()
            self._logger.warning(
                "Primary key violation while saving vehicle",
                extra={"vin": vehicle.vin, "error": str(e.orig)}
            )
            raise DuplicateVehicleError(vehicle.vin) from e

        return vehicle

    async def delete_by_id(self, vin: str) -> None:
        """Delete a vehicle."""
        log_database_operation(self._logger, "DELETE", "vehicles", vin=vin)

        stmt = delete(VehicleModel).where(VehicleModel.vin == vin)
        await self._session.execute(stmt)

    def _model_to_entity(self, model: VehicleModel) -> Vehicle:
        """Convert database model to domain entity."""
        return Vehicle(
            vin=model.vin,
            manufacturer_name=model.manufacturer_name,
            description=model.description,
            horse_power=model.horse_power,
            model_name=model.model_name,
            purchase_price=model.purchase_price,
            fuel_type=model.fuel_type
        )
