"""FleetState - the containers behind the console tool and the workflows across them."""

import logging
from typing import List, Optional

from .circular_queue import QUEUE_CAPACITY, DeliveryQueue, DriverQueue
from .delivery import Delivery
from .driver import Driver
from .maintenance_record import MaintenanceRecord
from .maintenance_task import MaintenanceTask
from .scheduler import SCHEDULER_CAPACITY, MaintenanceScheduler
from .vehicle import Vehicle
from .vehicle_index import VehicleIndex

logger = logging.getLogger(__name__)


class FleetState:
    """
    One of each container, passed explicitly to whichever front-end uses it.

    The containers are the only mutation surface; the methods here add the
    cross-container checks (known vehicle, duplicate ids) the front-ends need.
    """

    def __init__(
        self,
        queue_capacity: int = QUEUE_CAPACITY,
        scheduler_capacity: int = SCHEDULER_CAPACITY,
    ):
        self.vehicles = VehicleIndex()
        self.drivers = DriverQueue(queue_capacity)
        self.deliveries = DeliveryQueue(queue_capacity)
        self.scheduler = MaintenanceScheduler(scheduler_capacity)
        self.records: List[MaintenanceRecord] = []

    # -------------------------------------------------------------------------
    # Vehicles
    # -------------------------------------------------------------------------

    def add_vehicle(self, vehicle: Vehicle) -> bool:
        """Index a vehicle unless its registration is already taken."""
        if self.vehicles.search_by_registration(vehicle.registration) is not None:
            logger.debug("Duplicate registration %s rejected", vehicle.registration)
            return False
        self.vehicles.insert(vehicle)
        return True

    def remove_vehicle(self, registration: str) -> bool:
        return self.vehicles.remove(registration)

    def add_mileage(self, registration: str, distance: int) -> Optional[Vehicle]:
        """
        Record `distance` more miles on a vehicle.

        Re-keys the vehicle in the index and brings its maintenance tasks the
        same distance closer. Returns the vehicle, or None if unknown.
        """
        if distance < 0:
            raise ValueError(f"Distance cannot be negative, got {distance}")
        vehicle = self.vehicles.search_by_registration(registration)
        if vehicle is None:
            return None
        self.vehicles.update_mileage(registration, vehicle.mileage + distance)
        self.scheduler.update_tasks_for_vehicle(registration, distance)
        return vehicle

    # -------------------------------------------------------------------------
    # Drivers
    # -------------------------------------------------------------------------

    def add_driver(self, driver: Driver) -> bool:
        """Queue a driver. False on duplicate id or a full queue."""
        if self.drivers.driver_exists(driver.driver_id):
            logger.debug("Duplicate driver %s rejected", driver.driver_id)
            return False
        return self.drivers.enqueue(driver)

    def assign_next_driver(self, registration: Optional[str] = None) -> Optional[Driver]:
        """
        Take the next available driver off the queue.

        When `registration` names a known vehicle, the driver is recorded on
        it. An unknown registration leaves the queue untouched.
        """
        vehicle = None
        if registration is not None:
            vehicle = self.vehicles.search_by_registration(registration)
            if vehicle is None:
                return None
        driver = self.drivers.dequeue()
        if driver is not None and vehicle is not None:
            vehicle.driver_id = driver.driver_id
        return driver

    # -------------------------------------------------------------------------
    # Deliveries
    # -------------------------------------------------------------------------

    def create_delivery(self, delivery: Delivery) -> bool:
        """Queue a delivery for a known vehicle with a new package id."""
        if self.vehicles.search_by_registration(delivery.vehicle_registration) is None:
            logger.debug(
                "Delivery %s names unknown vehicle %s",
                delivery.package_id, delivery.vehicle_registration,
            )
            return False
        if self.deliveries.delivery_exists(delivery.package_id):
            return False
        return self.deliveries.enqueue(delivery)

    def process_next_delivery(self, distance: int = 0) -> Optional[Delivery]:
        """
        Complete the oldest pending delivery.

        A positive `distance` is added to the delivery vehicle's mileage
        (see `add_mileage`).
        """
        delivery = self.deliveries.dequeue()
        if delivery is not None and distance > 0:
            if self.add_mileage(delivery.vehicle_registration, distance) is None:
                logger.warning(
                    "Vehicle %s for delivery %s no longer indexed, mileage not updated",
                    delivery.vehicle_registration, delivery.package_id,
                )
        return delivery

    # -------------------------------------------------------------------------
    # Maintenance
    # -------------------------------------------------------------------------

    def schedule_maintenance(self, task: MaintenanceTask) -> bool:
        """Schedule a task for a known vehicle unless an identical one exists."""
        if self.vehicles.search_by_registration(task.registration) is None:
            return False
        if self.scheduler.task_exists(task.registration, task.miles_until_service):
            return False
        return self.scheduler.add_task(task)

    def process_next_maintenance(self) -> Optional[MaintenanceTask]:
        return self.scheduler.process_next_task()

    def log_service(self, record: MaintenanceRecord) -> None:
        self.records.append(record)

    def get_records_for_vehicle(self, registration: str) -> List[MaintenanceRecord]:
        return [r for r in self.records if r.registration == registration]
