"""MaintenanceRecord class for completed services."""


class MaintenanceRecord:
    """A record of maintenance performed on a vehicle."""

    def __init__(self, registration: str, date: str, service: str, cost: float = 0.0):
        self.registration = registration
        self.date = date
        self.service = service
        self.cost = float(cost)
