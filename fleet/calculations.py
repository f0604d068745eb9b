"""Helper functions for maintenance priority and fuel efficiency reporting."""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Sequence, TYPE_CHECKING

from dateutil.relativedelta import relativedelta

from .category import VehicleCategory
from .priority import Priority

if TYPE_CHECKING:
    from .vehicle import Vehicle
    from .maintenance_record import MaintenanceRecord
    from .maintenance_task import MaintenanceTask
    from .state import FleetState

# Maintenance priority bands (miles until service, inclusive upper bounds)
CRITICAL_MILES = 500
HIGH_MILES = 1000
MEDIUM_MILES = 2000

# Fuel usage thresholds (L/100km)
EXCELLENT_FUEL = 8
GOOD_FUEL = 12
FAIR_FUEL = 15
HIGH_USAGE_FUEL = 15
OUTLIER_FACTOR = 1.5


def priority_for_miles(miles_until_service: int) -> Priority:
    """Band the remaining miles before a service into a priority level."""
    if miles_until_service <= CRITICAL_MILES:
        return Priority.CRITICAL
    if miles_until_service <= HIGH_MILES:
        return Priority.HIGH
    if miles_until_service <= MEDIUM_MILES:
        return Priority.MEDIUM
    return Priority.LOW


def efficiency_rating(fuel_usage: float) -> str:
    """Rank fuel usage as Excellent, Good, Fair or Poor."""
    if fuel_usage < EXCELLENT_FUEL:
        return "Excellent"
    if fuel_usage <= GOOD_FUEL:
        return "Good"
    if fuel_usage <= FAIR_FUEL:
        return "Fair"
    return "Poor"


def efficiency_band(fuel_usage: float) -> str:
    """Coarse High/Medium/Low efficiency band used by the fuel filters."""
    if fuel_usage < EXCELLENT_FUEL:
        return "High"
    if fuel_usage <= GOOD_FUEL:
        return "Medium"
    return "Low"


@dataclass
class FuelReport:
    """Fleet-wide fuel efficiency summary."""

    count: int
    average: float
    most_efficient: "Vehicle"
    least_efficient: "Vehicle"
    high_usage: List["Vehicle"] = field(default_factory=list)


def average_fuel_usage(vehicles: Sequence["Vehicle"]) -> Optional[float]:
    if not vehicles:
        return None
    return sum(v.fuel_usage for v in vehicles) / len(vehicles)


def fuel_report(vehicles: Sequence["Vehicle"]) -> Optional[FuelReport]:
    """
    Summarize fuel usage across a vehicle snapshot.

    Ties for most/least efficient keep the earliest vehicle in the snapshot.
    Returns None for an empty fleet.
    """
    if not vehicles:
        return None
    most = vehicles[0]
    least = vehicles[0]
    for vehicle in vehicles:
        if vehicle.fuel_usage < most.fuel_usage:
            most = vehicle
        if vehicle.fuel_usage > least.fuel_usage:
            least = vehicle
    return FuelReport(
        count=len(vehicles),
        average=average_fuel_usage(vehicles),
        most_efficient=most,
        least_efficient=least,
        high_usage=[v for v in vehicles if v.fuel_usage > HIGH_USAGE_FUEL],
    )


def fuel_outliers(
    vehicles: Sequence["Vehicle"], factor: float = OUTLIER_FACTOR
) -> List["Vehicle"]:
    """Vehicles whose fuel usage exceeds the fleet average by `factor`."""
    average = average_fuel_usage(vehicles)
    if average is None:
        return []
    threshold = average * factor
    return [v for v in vehicles if v.fuel_usage > threshold]


def filter_by_fuel_usage(
    vehicles: Sequence["Vehicle"],
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
) -> List["Vehicle"]:
    """Vehicles with fuel usage in [minimum, maximum]; open bounds when None."""
    result = []
    for vehicle in vehicles:
        if minimum is not None and vehicle.fuel_usage < minimum:
            continue
        if maximum is not None and vehicle.fuel_usage > maximum:
            continue
        result.append(vehicle)
    return result


def records_since(
    records: Sequence["MaintenanceRecord"],
    months: float,
    today: Optional[date] = None,
) -> List["MaintenanceRecord"]:
    """
    Completed-service records dated within the last `months` months.

    Fractional months are converted to days (30 per month).
    """
    today = today or date.today()
    whole = int(months)
    days = int((months - whole) * 30)
    cutoff = today - relativedelta(months=whole, days=days)
    result = []
    for record in records:
        if date.fromisoformat(record.date) >= cutoff:
            result.append(record)
    return result


@dataclass
class FleetSummary:
    """Counts and averages across every container of a fleet."""

    total_vehicles: int
    trucks: int
    vans: int
    average_mileage: Optional[float]
    average_fuel_usage: Optional[float]
    available_drivers: int
    average_experience: Optional[float]
    pending_deliveries: int
    pending_maintenance: int
    most_urgent: Optional["MaintenanceTask"] = None


def fleet_summary(state: "FleetState") -> FleetSummary:
    """
    Summarize a fleet for the system report.

    Averages are None when there is nothing to average. The most urgent task
    is the one with the fewest miles until service (first found on ties).
    """
    vehicles = state.vehicles.get_all_vehicles()
    drivers = state.drivers.peek_all()
    tasks = state.scheduler.get_all_tasks()

    trucks = sum(1 for v in vehicles if v.category is VehicleCategory.TRUCK)
    average_mileage = None
    if vehicles:
        average_mileage = sum(v.mileage for v in vehicles) / len(vehicles)
    average_experience = None
    if drivers:
        average_experience = sum(d.experience_years for d in drivers) / len(drivers)
    most_urgent = None
    if tasks:
        most_urgent = min(tasks, key=lambda t: t.miles_until_service)

    return FleetSummary(
        total_vehicles=len(vehicles),
        trucks=trucks,
        vans=len(vehicles) - trucks,
        average_mileage=average_mileage,
        average_fuel_usage=average_fuel_usage(vehicles),
        available_drivers=len(drivers),
        average_experience=average_experience,
        pending_deliveries=len(state.deliveries),
        pending_maintenance=len(tasks),
        most_urgent=most_urgent,
    )
