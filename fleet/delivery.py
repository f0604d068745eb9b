"""Delivery class for queued package deliveries."""


class Delivery:
    """A pending delivery. Its lifecycle ends when it is dequeued."""

    def __init__(
            self,
            package_id: str,
            origin: str,
            destination: str,
            vehicle_registration: str,
            driver_id: str,
            eta: str,
    ):
        self.package_id = package_id
        self.origin = origin
        self.destination = destination
        self.vehicle_registration = vehicle_registration
        self.driver_id = driver_id
        self.eta = eta

    @property
    def route(self) -> str:
        return f"{self.origin} -> {self.destination}"

    def __repr__(self) -> str:
        return f"Delivery({self.package_id!r}, {self.route!r})"
