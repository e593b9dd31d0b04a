"""SQLAlchemy database models."""

from datetime import datetime

from sqlalchemy import Column, String, DateTime, Integer, Text, Enum as SQLEnum, Numeric
from sqlalchemy.orm import declarative_base

from src.vehicle_service.domain.entities.vehicle import FuelType

Base = declarative_base()


class VehicleModel(Base):
    """SQLAlchemy model for vehicles."""

    __tablename__ = "vehicles"

    # Primary key
    vin = Column(String(64), primary_key=True)

    # Vehicle details
    manufacturer_name = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    horse_power = Column(Integer, nullable=False)
    model_name = Column(String(100), nullable=False)
    purchase_price = Column(Numeric(19, 2), nullable=False)
    # Stored by enum name
    fuel_type = Column(SQLEnum(FuelType, name="fuel_type"), nullable=False)

    # Timestamps
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<VehicleModel(vin='{self.vin}', manufacturer_name='{self.manufacturer_name}', model_name='{self.model_name}')>"
