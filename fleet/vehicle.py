"""Vehicle class - a truck or van tracked by the fleet."""

from typing import Union

from .category import VehicleCategory

UNASSIGNED = "UNASSIGNED"


class Vehicle:
    """A fleet vehicle, indexed by mileage and identified by registration."""

    def __init__(
        self,
        registration: str,
        category: Union[VehicleCategory, str],
        mileage: int,
        fuel_usage: float,
        driver_id: str = UNASSIGNED,
    ):
        if mileage < 0:
            raise ValueError(f"Mileage cannot be negative, got {mileage}")
        if fuel_usage <= 0:
            raise ValueError(f"Fuel usage must be greater than 0, got {fuel_usage}")
        self.registration = registration
        self.category = VehicleCategory.parse(category)
        self.mileage = int(mileage)
        self.fuel_usage = float(fuel_usage)
        self.driver_id = driver_id or UNASSIGNED

    @property
    def is_assigned(self) -> bool:
        return self.driver_id != UNASSIGNED

    @property
    def name(self) -> str:
        """Human-readable label, e.g. 'GT1234-22 (Truck)'."""
        return f"{self.registration} ({self.category.value})"

    def __repr__(self) -> str:
        return (
            f"Vehicle({self.registration!r}, {self.category.value!r}, "
            f"mileage={self.mileage}, fuel_usage={self.fuel_usage})"
        )
