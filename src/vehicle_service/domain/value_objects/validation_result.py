"""Validation result value object."""

from dataclasses import dataclass, field
from typing import Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..entities.vehicle import Vehicle


@dataclass(frozen=True)
class ValidationResult:
    """Tagged result of validating an incoming vehicle representation.

    Either carries the parsed vehicle, or a mapping of field name to
    error message. Never both.
    """

    vehicle: Optional["Vehicle"] = None
    errors: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate result consistency."""
        if self.vehicle is None and not self.errors:
            raise ValueError("A failed validation result must carry at least one error")
        if self.vehicle is not None and self.errors:
            raise ValueError("A successful validation result cannot carry errors")

    @classmethod
    def ok(cls, vehicle: "Vehicle") -> "ValidationResult":
        """Build a successful result."""
        return cls(vehicle=vehicle)

    @classmethod
    def failed(cls, errors: Dict[str, str]) -> "ValidationResult":
        """Build a failed result."""
        return cls(errors=dict(errors))

    @property
    def is_ok(self) -> bool:
        """Check whether validation succeeded."""
        return self.vehicle is not None
