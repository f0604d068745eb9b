"""Vehicle category enum."""

from enum import Enum


class VehicleCategory(Enum):
    """Kinds of vehicle the fleet operates."""

    TRUCK = "Truck"
    VAN = "Van"

    @classmethod
    def parse(cls, value: str) -> "VehicleCategory":
        """Case-insensitive lookup by display value ("truck", "Van", ...)."""
        if isinstance(value, cls):
            return value
        for category in cls:
            if category.value.lower() == str(value).strip().lower():
                return category
        raise ValueError(f"Vehicle category must be one of Truck/Van, got '{value}'")
