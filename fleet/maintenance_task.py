"""MaintenanceTask class - a scheduled service ordered by urgency."""

from .calculations import priority_for_miles
from .priority import Priority


class MaintenanceTask:
    """Service due for a vehicle within `miles_until_service`. Lower = sooner."""

    def __init__(self, registration: str, miles_until_service: int):
        if miles_until_service < 0:
            raise ValueError(
                f"Miles until service cannot be negative, got {miles_until_service}"
            )
        self.registration = registration
        self.miles_until_service = int(miles_until_service)

    @property
    def priority(self) -> Priority:
        return priority_for_miles(self.miles_until_service)

    def __repr__(self) -> str:
        return f"MaintenanceTask({self.registration!r}, {self.miles_until_service})"
