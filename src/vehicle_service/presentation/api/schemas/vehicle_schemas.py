"""Pydantic schemas for vehicle API requests and responses."""

from decimal import Decimal
from typing import Literal, Union
from pydantic import BaseModel, Field, field_serializer, field_validator
from pydantic_core import PydanticCustomError

from ....domain.entities.vehicle import FuelType, Vehicle

# Column bounds of the vehicles table
VIN_MAX_LENGTH = 64
NAME_MAX_LENGTH = 100
MAX_HORSE_POWER = 2**31 - 1

# Prices up to 15 significant digits survive the trip through a JSON number
PRICE_MAX_DIGITS = 15
PRICE_DECIMAL_PLACES = 2


class VehicleRequest(BaseModel):
    """Request model for creating or replacing a vehicle."""
    vin: str = Field(
        ..., min_length=1, max_length=VIN_MAX_LENGTH, description="Vehicle identification number"
    )
    manufacturer_name: str = Field(..., alias="manufacturerName", min_length=1, max_length=NAME_MAX_LENGTH)
    description: str = Field(..., min_length=1)
    horse_power: int = Field(..., alias="horsePower", ge=1, le=MAX_HORSE_POWER)
    model_name: str = Field(..., alias="modelName", min_length=1, max_length=NAME_MAX_LENGTH)
    purchase_price: Decimal = Field(
        ...,
        alias="purchasePrice",
        ge=0,
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
        allow_inf_nan=False
    )
    fuel_type: Literal["GASOLINE", "DIESEL", "ELECTRIC", "HYBRID"] = Field(..., alias="fuelType")

    class Config:
        protected_namespaces = ()

    @field_validator("vin", "manufacturer_name", "description", "model_name")
    @classmethod
    def reject_blank(cls, v: str) -> str:
        """Whitespace-only text counts as missing."""
        if not v.strip():
            raise PydanticCustomError("string_blank", "Value is blank")
        return v

    @field_validator("horse_power", mode="before")
    @classmethod
    def reject_boolean(cls, v):
        """JSON true/false is not a horse power."""
        if isinstance(v, bool):
            raise PydanticCustomError("int_type", "Input should be a valid integer")
        return v

    def to_entity(self) -> Vehicle:
        """Build the domain vehicle described by this request."""
        return Vehicle(
            vin=self.vin,
            manufacturer_name=self.manufacturer_name,
            description=self.description,
            horse_power=self.horse_power,
            model_name=self.model_name,
            purchase_price=self.purchase_price,
            fuel_type=FuelType[self.fuel_type]
        )


class VehicleResponse(BaseModel):
    """Response model for a vehicle."""
    vin: str
    manufacturer_name: str = Field(..., alias="manufacturerName")
    description: str
    horse_power: int = Field(..., alias="horsePower")
    model_name: str = Field(..., alias="modelName")
    purchase_price: Decimal = Field(..., alias="purchasePrice")
    fuel_type: FuelType = Field(..., alias="fuelType")

    class Config:
        populate_by_name = True
        protected_namespaces = ()

    @field_serializer("purchase_price", when_used="json")
    def serialize_purchase_price(self, value: Decimal) -> Union[int, float]:
        """Emit the price as a JSON number rather than a string."""
        if value == value.to_integral_value():
            return int(value)
        return float(value)

    @classmethod
    def from_entity(cls, vehicle: Vehicle) -> "VehicleResponse":
        """Build a response from a domain vehicle."""
        return cls(
            vin=vehicle.vin,
            manufacturer_name=vehicle.manufacturer_name,
            description=vehicle.description,
            horse_power=vehicle.horse_power,
            model_name=vehicle.model_name,
            purchase_price=vehicle.purchase_price,
            fuel_type=vehicle.fuel_type
        )


class ErrorResponse(BaseModel):
    """Response model for request-level errors."""
    error: str
