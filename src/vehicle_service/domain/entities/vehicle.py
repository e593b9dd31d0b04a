"""Vehicle entity and fuel type enumeration."""

from decimal import Decimal
from enum import Enum


class FuelType(Enum):
    """Fuel type enumeration."""
    GASOLINE = "GASOLINE"
    DIESEL = "DIESEL"
    ELECTRIC = "ELECTRIC"
    HYBRID = "HYBRID"


class Vehicle:
    """Vehicle entity identified by its VIN."""

    def __init__(
        self,
        vin: str,
        manufacturer_name: str,
        description: str,
        horse_power: int,
        model_name: str,
        purchase_price: Decimal,
        fuel_type: FuelType
    ):
        self._vin = vin
        self._manufacturer_name = manufacturer_name
        self._description = description
        self._horse_power = horse_power
        self._model_name = model_name
        self._purchase_price = purchase_price
        self._fuel_type = fuel_type

    @property
    def vin(self) -> str:
        """Get vehicle identification number."""
        return self._vin

    @property
    def manufacturer_name(self) -> str:
        """Get manufacturer name."""
        return self._manufacturer_name

    @property
    def description(self) -> str:
        """Get vehicle description."""
        return self._description

    @property
    def horse_power(self) -> int:
        """Get engine horse power."""
        return self._horse_power

    @property
    def model_name(self) -> str:
        """Get model name."""
        return self._model_name

    @property
    def purchase_price(self) -> Decimal:
        """Get purchase price."""
        return self._purchase_price

    @property
    def fuel_type(self) -> FuelType:
        """Get fuel type."""
        return self._fuel_type

    def update_details(self, other: "Vehicle") -> None:
        """Overwrite every mutable field from another vehicle.

        The VIN is the identity of the record and is never copied.
        """
        self._manufacturer_name = other.manufacturer_name
        self._description = other.description
        self._horse_power = other.horse_power
        self._model_name = other.model_name
        self._purchase_price = other.purchase_price
        self._fuel_type = other.fuel_type

    def __eq__(self, other: object) -> bool:
        """Check equality on every field."""
        if not isinstance(other, Vehicle):
            return False
        return (
            self.vin == other.vin
            and self.manufacturer_name == other.manufacturer_name
            and self.description == other.description
            and self.horse_power == other.horse_power
            and self.model_name == other.model_name
            and self.purchase_price == other.purchase_price
            and self.fuel_type == other.fuel_type
        )

    __hash__ = None

    def __str__(self) -> str:
        """String representation."""
        return f"{self.__class__.__name__}({self.vin})"

    def __repr__(self) -> str:
        return (
            f"Vehicle(vin='{self.vin}', manufacturer_name='{self.manufacturer_name}', "
            f"model_name='{self.model_name}', fuel_type={self.fuel_type})"
        )
