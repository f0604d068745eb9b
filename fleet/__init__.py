"""
Fleet tracking data structures.

This package provides the containers and algorithms behind the fleet console:
- Vehicle, Driver, Delivery, MaintenanceTask, MaintenanceRecord: record types
- VehicleIndex: mileage-ordered binary search tree of vehicles
- DriverQueue / DeliveryQueue: fixed-capacity circular FIFO queues
- MaintenanceScheduler: min-heap of maintenance tasks by miles until service
- quick_sort, merge_sort, binary_search: instrumented snapshot algorithms
- FleetState: one of each container plus the workflows across them
"""

from .category import VehicleCategory
from .priority import Priority
from .vehicle import Vehicle, UNASSIGNED
from .driver import Driver
from .delivery import Delivery
from .maintenance_task import MaintenanceTask
from .maintenance_record import MaintenanceRecord
from .vehicle_index import VehicleIndex
from .circular_queue import CircularQueue, DriverQueue, DeliveryQueue, QUEUE_CAPACITY
from .scheduler import MaintenanceScheduler, SCHEDULER_CAPACITY
from .algorithms import (
    InvalidSortKeyError,
    SearchResult,
    SortResult,
    binary_search,
    merge_sort,
    quick_sort,
    sort_vehicles,
)
from .calculations import (
    FleetSummary,
    FuelReport,
    efficiency_band,
    efficiency_rating,
    filter_by_fuel_usage,
    fleet_summary,
    fuel_outliers,
    fuel_report,
    priority_for_miles,
    records_since,
)
from .state import FleetState
from .loader import load_fleet, save_fleet

__all__ = [
    "VehicleCategory",
    "Priority",
    "Vehicle",
    "UNASSIGNED",
    "Driver",
    "Delivery",
    "MaintenanceTask",
    "MaintenanceRecord",
    "VehicleIndex",
    "CircularQueue",
    "DriverQueue",
    "DeliveryQueue",
    "QUEUE_CAPACITY",
    "MaintenanceScheduler",
    "SCHEDULER_CAPACITY",
    "InvalidSortKeyError",
    "SearchResult",
    "SortResult",
    "binary_search",
    "merge_sort",
    "quick_sort",
    "sort_vehicles",
    "FleetSummary",
    "FuelReport",
    "efficiency_band",
    "efficiency_rating",
    "filter_by_fuel_usage",
    "fleet_summary",
    "fuel_outliers",
    "fuel_report",
    "priority_for_miles",
    "records_since",
    "FleetState",
    "load_fleet",
    "save_fleet",
]
