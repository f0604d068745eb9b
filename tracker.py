#!/usr/bin/env python3
"""
Unified CLI for fleet tracking.

Commands:
  vehicles         - List vehicles (by mileage, or sorted by another key)
  add-vehicle      - Register a new vehicle
  remove-vehicle   - Remove a vehicle by registration
  find             - Find a vehicle by registration or mileage
  update-miles     - Add distance driven to a vehicle
  drivers          - List drivers waiting for assignment
  add-driver       - Queue a driver
  assign-driver    - Assign the next available driver
  deliveries       - List pending deliveries
  add-delivery     - Queue a delivery
  process-delivery - Complete the next pending delivery
  tasks            - List scheduled maintenance by priority
  schedule         - Schedule a maintenance task
  process-task     - Service the most urgent vehicle
  log              - Record a completed service
  history          - View completed services
  fuel             - Fuel efficiency report
  outliers         - Vehicles using far more fuel than average
  filter-fuel      - Vehicles within a fuel usage band or range
  sort             - Sort vehicles with quicksort or mergesort (timed)
  search           - Binary search by registration (timed)
  report           - Fleet-wide summary (vehicles, drivers, deliveries, maintenance)
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

import yaml

from fleet import (
    Delivery,
    Driver,
    MaintenanceRecord,
    MaintenanceTask,
    Vehicle,
    VehicleCategory,
    binary_search,
    efficiency_band,
    efficiency_rating,
    filter_by_fuel_usage,
    fleet_summary,
    fuel_outliers,
    fuel_report,
    load_fleet,
    merge_sort,
    records_since,
    save_fleet,
    sort_vehicles,
)
from fleet.algorithms import SORT_KEYS, SORTERS
from fleet.calculations import OUTLIER_FACTOR

# =============================================================================
# Formatting helpers
# =============================================================================


def format_miles(miles: Optional[float]) -> str:
    """Format mileage for display."""
    return f"{miles:,.0f}" if miles is not None else "-"


def format_fuel(fuel_usage: Optional[float]) -> str:
    """Format fuel usage (L/100km) for display."""
    return f"{fuel_usage:.2f}" if fuel_usage is not None else "-"


def format_cost(cost: Optional[float]) -> str:
    """Format cost for display."""
    return f"GH₵{cost:,.2f}" if cost is not None else "-"


def truncate(text: Optional[str], max_len: int = 16) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def make_vehicle_table(vehicles: List[Vehicle], rank: bool = False) -> List[List[str]]:
    """Convert vehicles to table rows, optionally with a leading rank column."""
    rows = []
    for i, vehicle in enumerate(vehicles, start=1):
        row = [
            vehicle.registration,
            vehicle.category.value,
            format_miles(vehicle.mileage),
            format_fuel(vehicle.fuel_usage),
            vehicle.driver_id,
            efficiency_rating(vehicle.fuel_usage),
        ]
        if rank:
            row.insert(0, str(i))
        rows.append(row)
    return rows


VEHICLE_HEADERS = ["Registration", "Type", "Mileage", "Fuel (L/100km)", "Driver", "Rating"]


def make_driver_table(drivers: List[Driver]) -> List[List[str]]:
    return [
        [d.driver_id, d.name, str(d.experience_years), d.location]
        for d in drivers
    ]


def make_delivery_table(deliveries: List[Delivery]) -> List[List[str]]:
    return [
        [
            d.package_id,
            d.origin,
            d.destination,
            d.vehicle_registration,
            d.driver_id,
            truncate(d.eta),
        ]
        for d in deliveries
    ]


def make_task_table(tasks: List[MaintenanceTask]) -> List[List[str]]:
    return [
        [t.registration, format_miles(t.miles_until_service), t.priority.name]
        for t in tasks
    ]


def make_record_table(records: List[MaintenanceRecord]) -> List[List[str]]:
    return [
        [r.date, r.registration, truncate(r.service, 30), format_cost(r.cost)]
        for r in records
    ]


def print_vehicles(vehicles: List[Vehicle], rank: bool = False) -> None:
    headers = (["#"] if rank else []) + VEHICLE_HEADERS
    print(tabulate(make_vehicle_table(vehicles, rank=rank), headers=headers, tablefmt="simple"))


# =============================================================================
# Vehicle commands
# =============================================================================


def cmd_vehicles(args):
    """List vehicles in mileage order, or sorted by another key."""
    state = load_fleet(args.fleet_file)
    vehicles = state.vehicles.get_all_vehicles()

    if not vehicles:
        print("No vehicles in the system.")
        return 0

    if args.sort != "mileage":
        vehicles = merge_sort(vehicles, key=args.sort).items

    print(f"Vehicles: {len(vehicles)} (sorted by {args.sort})")
    print()
    print_vehicles(vehicles)
    return 0


def cmd_add_vehicle(args):
    """Register a new vehicle."""
    state = load_fleet(args.fleet_file)

    try:
        vehicle = Vehicle(
            args.registration, args.category, args.mileage, args.fuel_usage, args.driver
        )
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    if not state.add_vehicle(vehicle):
        print(f"Error: Vehicle with registration {args.registration} already exists")
        return 1

    print(f"Adding vehicle to {args.fleet_file}:")
    print_vehicles([vehicle])
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_fleet(args.fleet_file, state)
    print("Vehicle saved.")
    return 0


def cmd_remove_vehicle(args):
    """Remove a vehicle by registration."""
    state = load_fleet(args.fleet_file)

    vehicle = state.vehicles.search_by_registration(args.registration)
    if vehicle is None:
        print(f"Error: Vehicle with registration {args.registration} not found")
        return 1

    print("Removing vehicle:")
    print_vehicles([vehicle])
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    state.remove_vehicle(args.registration)
    save_fleet(args.fleet_file, state)
    print("Vehicle removed.")
    return 0


def cmd_find(args):
    """Find a vehicle by registration (full scan) or mileage (tree descent)."""
    state = load_fleet(args.fleet_file)

    if args.registration:
        vehicle = state.vehicles.search_by_registration(args.registration)
        label = f"registration {args.registration}"
    else:
        vehicle = state.vehicles.search_by_mileage(args.mileage)
        label = f"mileage {format_miles(args.mileage)}"

    if vehicle is None:
        print(f"No vehicle found with {label}.")
        return 1

    print_vehicles([vehicle])
    return 0


def cmd_update_miles(args):
    """Add distance driven to a vehicle and bring its maintenance forward."""
    state = load_fleet(args.fleet_file)

    vehicle = state.vehicles.search_by_registration(args.registration)
    if vehicle is None:
        print(f"Error: Vehicle with registration {args.registration} not found")
        return 1

    old_miles = vehicle.mileage
    state.add_mileage(args.registration, args.distance)

    print(f"Vehicle: {vehicle.name}")
    print(f"Previous mileage: {format_miles(old_miles)}")
    print(f"New mileage:      {format_miles(vehicle.mileage)}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_fleet(args.fleet_file, state)
    print("Mileage updated.")
    return 0


# =============================================================================
# Driver commands
# =============================================================================


def cmd_drivers(args):
    """List drivers waiting for assignment, next in line first."""
    state = load_fleet(args.fleet_file)
    drivers = state.drivers.peek_all()

    if not drivers:
        print("No drivers available.")
        return 0

    print(f"Available drivers: {len(drivers)} / {state.drivers.capacity}")
    print()
    headers = ["ID", "Name", "Exp (yrs)", "Location"]
    print(tabulate(make_driver_table(drivers), headers=headers, tablefmt="simple"))
    return 0


def cmd_add_driver(args):
    """Queue a driver for assignment."""
    state = load_fleet(args.fleet_file)

    try:
        driver = Driver(args.driver_id, args.name, args.experience, args.location)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    if state.drivers.driver_exists(driver.driver_id):
        print(f"Error: Driver {driver.driver_id} is already queued")
        return 1
    if not state.add_driver(driver):
        print("Error: Driver queue is full")
        return 1

    print(f"Queued driver {driver.driver_id} ({driver.name}).")

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_fleet(args.fleet_file, state)
    return 0


def cmd_assign_driver(args):
    """Assign the next available driver, optionally to a vehicle."""
    state = load_fleet(args.fleet_file)

    if args.vehicle and state.vehicles.search_by_registration(args.vehicle) is None:
        print(f"Error: Vehicle with registration {args.vehicle} not found")
        return 1

    driver = state.assign_next_driver(args.vehicle)
    if driver is None:
        print("Error: No drivers available for assignment.")
        return 1

    print(f"Assigned driver {driver.driver_id} ({driver.name})", end="")
    print(f" to {args.vehicle}." if args.vehicle else ".")

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_fleet(args.fleet_file, state)
    return 0


# =============================================================================
# Delivery commands
# =============================================================================


def cmd_deliveries(args):
    """List pending deliveries in processing (FIFO) order."""
    state = load_fleet(args.fleet_file)
    deliveries = state.deliveries.peek_all()

    if not deliveries:
        print("No pending deliveries.")
        return 0

    print(f"Pending deliveries: {len(deliveries)}")
    print()
    headers = ["Pkg ID", "Origin", "Destination", "Vehicle", "Driver", "ETA"]
    print(tabulate(make_delivery_table(deliveries), headers=headers, tablefmt="simple"))
    return 0


def cmd_add_delivery(args):
    """Queue a delivery for an existing vehicle."""
    state = load_fleet(args.fleet_file)

    delivery = Delivery(
        args.package_id, args.origin, args.destination, args.vehicle, args.driver, args.eta
    )

    if state.vehicles.search_by_registration(args.vehicle) is None:
        print(f"Error: Vehicle with registration {args.vehicle} not found")
        return 1
    if state.deliveries.delivery_exists(args.package_id):
        print(f"Error: Package {args.package_id} is already queued")
        return 1
    if not state.create_delivery(delivery):
        print("Error: Delivery queue is full")
        return 1

    print(f"Queued delivery {delivery.package_id}: {delivery.route}")

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_fleet(args.fleet_file, state)
    return 0


def cmd_process_delivery(args):
    """Complete the oldest pending delivery."""
    state = load_fleet(args.fleet_file)

    delivery = state.process_next_delivery(distance=args.distance)
    if delivery is None:
        print("Error: No pending deliveries to process.")
        return 1

    print(f"Completed delivery {delivery.package_id}: {delivery.route}")
    if args.distance:
        vehicle = state.vehicles.search_by_registration(delivery.vehicle_registration)
        if vehicle is not None:
            print(f"  {vehicle.registration} mileage now {format_miles(vehicle.mileage)}")

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_fleet(args.fleet_file, state)
    return 0


# =============================================================================
# Maintenance commands
# =============================================================================


def cmd_tasks(args):
    """List scheduled maintenance, most urgent first."""
    state = load_fleet(args.fleet_file)
    tasks = state.scheduler.show_all_tasks()

    if not tasks:
        print("No pending maintenance tasks.")
        return 0

    headers = ["Vehicle", "Miles Left", "Priority"]
    print(tabulate(make_task_table(tasks), headers=headers, tablefmt="simple"))
    return 0


def cmd_schedule(args):
    """Schedule a maintenance task."""
    state = load_fleet(args.fleet_file)

    try:
        task = MaintenanceTask(args.registration, args.miles)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    if state.vehicles.search_by_registration(args.registration) is None:
        print(f"Error: Vehicle with registration {args.registration} not found")
        return 1
    if state.scheduler.task_exists(task.registration, task.miles_until_service):
        print("Error: An identical maintenance task is already scheduled")
        return 1
    if not state.schedule_maintenance(task):
        print("Error: Maintenance scheduler is full")
        return 1

    print(f"Scheduled maintenance for {task.registration} "
          f"in {format_miles(task.miles_until_service)} miles ({task.priority.name})")

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_fleet(args.fleet_file, state)
    return 0


def cmd_process_task(args):
    """Service the most urgent vehicle and optionally log the work."""
    state = load_fleet(args.fleet_file)

    task = state.process_next_maintenance()
    if task is None:
        print("No maintenance tasks available.")
        return 1

    print("Servicing vehicle with highest priority:")
    headers = ["Vehicle", "Miles Left", "Priority"]
    print(tabulate(make_task_table([task]), headers=headers, tablefmt="simple"))

    if args.service:
        record = MaintenanceRecord(
            task.registration,
            args.date or date.today().isoformat(),
            args.service,
            args.cost or 0.0,
        )
        state.log_service(record)
        print(f"Logged service: {record.service}")

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_fleet(args.fleet_file, state)
    return 0


def cmd_log(args):
    """Record a completed service for a vehicle."""
    state = load_fleet(args.fleet_file)

    if state.vehicles.search_by_registration(args.registration) is None:
        print(f"Error: Vehicle with registration {args.registration} not found")
        return 1

    record = MaintenanceRecord(
        args.registration,
        args.date or date.today().isoformat(),
        args.service,
        args.cost or 0.0,
    )

    print(f"Adding service record to {args.fleet_file}:")
    print(f"  Vehicle: {record.registration}")
    print(f"  Date:    {record.date}")
    print(f"  Service: {record.service}")
    if record.cost:
        print(f"  Cost:    {format_cost(record.cost)}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    state.log_service(record)
    save_fleet(args.fleet_file, state)
    print("Record saved.")
    return 0


def cmd_history(args):
    """View completed services, newest first."""
    state = load_fleet(args.fleet_file)

    records = state.records
    if args.vehicle:
        records = state.get_records_for_vehicle(args.vehicle)
    if args.months:
        records = records_since(records, args.months)
    records = sorted(records, key=lambda r: r.date, reverse=True)

    if not records:
        print("No service records found.")
        return 0

    total_cost = sum(r.cost for r in records)
    print(f"Services: {len(records)}")
    if total_cost > 0:
        print(f"Total cost: {format_cost(total_cost)}")
    print()
    headers = ["Date", "Vehicle", "Service", "Cost"]
    print(tabulate(make_record_table(records), headers=headers, tablefmt="simple"))
    return 0


# =============================================================================
# Fuel reports
# =============================================================================


def cmd_fuel(args):
    """Fleet fuel efficiency report."""
    state = load_fleet(args.fleet_file)
    vehicles = state.vehicles.get_all_vehicles()

    report = fuel_report(vehicles)
    if report is None:
        print("No vehicles in the system.")
        return 0

    rows = [
        [
            v.registration,
            v.category.value,
            format_fuel(v.fuel_usage),
            "High Usage" if v in report.high_usage else "Normal",
        ]
        for v in vehicles
    ]
    print(tabulate(rows, headers=["Vehicle", "Type", "Fuel (L/100km)", "Status"], tablefmt="simple"))
    print()
    print(f"Total vehicles: {report.count}")
    print(f"Average fuel usage: {format_fuel(report.average)} L/100km")
    print(f"Most efficient: {report.most_efficient.registration} "
          f"({format_fuel(report.most_efficient.fuel_usage)} L/100km)")
    print(f"Least efficient: {report.least_efficient.registration} "
          f"({format_fuel(report.least_efficient.fuel_usage)} L/100km)")
    return 0


def cmd_outliers(args):
    """Vehicles whose fuel usage is well above the fleet average."""
    state = load_fleet(args.fleet_file)
    vehicles = state.vehicles.get_all_vehicles()

    report = fuel_report(vehicles)
    if report is None:
        print("No vehicles in the system.")
        return 0

    outliers = fuel_outliers(vehicles, args.factor)
    print(f"Average fuel usage: {format_fuel(report.average)} L/100km")
    print(f"Outlier threshold: {format_fuel(report.average * args.factor)} L/100km")
    print()

    if not outliers:
        print("No fuel efficiency outliers found.")
        return 0

    rows = [
        [v.registration, v.category.value, format_fuel(v.fuel_usage),
         f"+{format_fuel(v.fuel_usage - report.average)}"]
        for v in outliers
    ]
    print(tabulate(rows, headers=["Vehicle", "Type", "Fuel", "Excess"], tablefmt="simple"))
    return 0


FUEL_BANDS = ["high", "medium", "low"]


def cmd_filter_fuel(args):
    """Vehicles within a fuel efficiency band or a custom range."""
    state = load_fleet(args.fleet_file)
    vehicles = state.vehicles.get_all_vehicles()

    if args.band:
        matches = [v for v in vehicles if efficiency_band(v.fuel_usage).lower() == args.band]
    else:
        matches = filter_by_fuel_usage(vehicles, args.min, args.max)

    if not matches:
        print("No vehicles found matching the filter criteria.")
        return 0

    print_vehicles(matches)
    return 0


def format_average(value: Optional[float], unit: str = "") -> str:
    """Format an optional average to two decimals with a unit suffix."""
    if value is None:
        return "-"
    return f"{value:,.2f}{unit}"


def cmd_report(args):
    """Fleet-wide summary across vehicles, drivers, deliveries and maintenance."""
    state = load_fleet(args.fleet_file)
    summary = fleet_summary(state)

    urgent = "-"
    if summary.most_urgent is not None:
        urgent = (f"{summary.most_urgent.registration} "
                  f"({format_miles(summary.most_urgent.miles_until_service)} miles)")

    rows = [
        ["Vehicles", summary.total_vehicles],
        ["  Trucks", summary.trucks],
        ["  Vans", summary.vans],
        ["  Average mileage", format_average(summary.average_mileage)],
        ["  Average fuel usage", format_average(summary.average_fuel_usage, " L/100km")],
        ["Available drivers", summary.available_drivers],
        ["  Average experience", format_average(summary.average_experience, " yrs")],
        ["Pending deliveries", summary.pending_deliveries],
        ["Pending maintenance", summary.pending_maintenance],
        ["  Most urgent", urgent],
    ]
    print(f"Fleet report for {args.fleet_file}")
    print()
    print(tabulate(rows, tablefmt="simple", disable_numparse=True))
    return 0


# =============================================================================
# Sort / search
# =============================================================================


def cmd_sort(args):
    """Sort a vehicle snapshot and report timing."""
    state = load_fleet(args.fleet_file)
    vehicles = state.vehicles.get_all_vehicles()

    if not vehicles:
        print("No vehicles in the system.")
        return 0

    result = sort_vehicles(vehicles, args.algorithm, args.key)
    if args.desc:
        result.items.reverse()

    print_vehicles(result.items, rank=True)
    print()
    print(f"Algorithm: {result.algorithm}sort by {result.key}")
    print(f"Comparisons: {result.comparisons}")
    print(f"Time: {result.elapsed_ms:.3f} ms")
    return 0


def cmd_search(args):
    """Binary search for a registration (case-insensitive)."""
    state = load_fleet(args.fleet_file)

    ordered = merge_sort(state.vehicles.get_all_vehicles(), key="registration")
    result = binary_search(ordered.items, args.registration, key="registration")

    if result.found:
        print_vehicles([result.item])
    else:
        print(f"No vehicle found with registration {args.registration}.")
    print()
    print(f"Comparisons: {result.comparisons}")
    print(f"Sort time: {ordered.elapsed_ms:.3f} ms, search time: {result.elapsed_ms:.3f} ms")
    return 0 if result.found else 1


# =============================================================================
# Main
# =============================================================================

COMMANDS = {
    "vehicles": cmd_vehicles,
    "add-vehicle": cmd_add_vehicle,
    "remove-vehicle": cmd_remove_vehicle,
    "find": cmd_find,
    "update-miles": cmd_update_miles,
    "drivers": cmd_drivers,
    "add-driver": cmd_add_driver,
    "assign-driver": cmd_assign_driver,
    "deliveries": cmd_deliveries,
    "add-delivery": cmd_add_delivery,
    "process-delivery": cmd_process_delivery,
    "tasks": cmd_tasks,
    "schedule": cmd_schedule,
    "process-task": cmd_process_task,
    "log": cmd_log,
    "history": cmd_history,
    "fuel": cmd_fuel,
    "outliers": cmd_outliers,
    "filter-fuel": cmd_filter_fuel,
    "sort": cmd_sort,
    "search": cmd_search,
    "report": cmd_report,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fleet tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s data/fleet.yaml vehicles
  %(prog)s data/fleet.yaml vehicles --sort fuel_usage
  %(prog)s data/fleet.yaml add-vehicle GT1234-22 truck 50000 18.5 --driver D01
  %(prog)s data/fleet.yaml find --mileage 50000
  %(prog)s data/fleet.yaml process-delivery --distance 120
  %(prog)s data/fleet.yaml schedule GT1234-22 400
  %(prog)s data/fleet.yaml process-task --service "Oil Change" --cost 350
  %(prog)s data/fleet.yaml sort --algorithm quick --key registration
  %(prog)s data/fleet.yaml search gt1234-22
  %(prog)s data/fleet.yaml report
""",
    )
    parser.add_argument(
        "fleet_file",
        type=Path,
        help="Path to fleet YAML file",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log container operations",
    )

    dry_run = argparse.ArgumentParser(add_help=False)
    dry_run.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would change without saving",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Vehicles
    vehicles_parser = subparsers.add_parser("vehicles", help="List vehicles")
    vehicles_parser.add_argument(
        "--sort",
        choices=list(SORT_KEYS),
        default="mileage",
        help="Sort key (default: mileage, the index order)",
    )

    add_vehicle_parser = subparsers.add_parser(
        "add-vehicle", parents=[dry_run], help="Register a new vehicle"
    )
    add_vehicle_parser.add_argument("registration", type=str, help="Registration (e.g., GT1234-22)")
    add_vehicle_parser.add_argument(
        "category",
        type=VehicleCategory.parse,
        help="Vehicle type: truck or van",
    )
    add_vehicle_parser.add_argument("mileage", type=int, help="Current mileage")
    add_vehicle_parser.add_argument("fuel_usage", type=float, help="Fuel usage in L/100km")
    add_vehicle_parser.add_argument("--driver", type=str, default=None, help="Assigned driver ID")

    remove_vehicle_parser = subparsers.add_parser(
        "remove-vehicle", parents=[dry_run], help="Remove a vehicle"
    )
    remove_vehicle_parser.add_argument("registration", type=str)

    find_parser = subparsers.add_parser("find", help="Find a vehicle")
    find_group = find_parser.add_mutually_exclusive_group(required=True)
    find_group.add_argument("--registration", type=str, help="Exact registration")
    find_group.add_argument("--mileage", type=int, help="Exact mileage")

    update_miles_parser = subparsers.add_parser(
        "update-miles", parents=[dry_run], help="Add distance driven to a vehicle"
    )
    update_miles_parser.add_argument("registration", type=str)
    update_miles_parser.add_argument("distance", type=int, help="Distance driven since last update")

    # Drivers
    subparsers.add_parser("drivers", help="List available drivers")

    add_driver_parser = subparsers.add_parser(
        "add-driver", parents=[dry_run], help="Queue a driver"
    )
    add_driver_parser.add_argument("driver_id", type=str, help="Driver ID (e.g., D01)")
    add_driver_parser.add_argument("name", type=str)
    add_driver_parser.add_argument("experience", type=int, help="Years of experience")
    add_driver_parser.add_argument("location", type=str, help="Base location")

    assign_parser = subparsers.add_parser(
        "assign-driver", parents=[dry_run], help="Assign the next available driver"
    )
    assign_parser.add_argument("--vehicle", type=str, help="Vehicle registration to assign to")

    # Deliveries
    subparsers.add_parser("deliveries", help="List pending deliveries")

    add_delivery_parser = subparsers.add_parser(
        "add-delivery", parents=[dry_run], help="Queue a delivery"
    )
    add_delivery_parser.add_argument("package_id", type=str)
    add_delivery_parser.add_argument("origin", type=str)
    add_delivery_parser.add_argument("destination", type=str)
    add_delivery_parser.add_argument("vehicle", type=str, help="Vehicle registration")
    add_delivery_parser.add_argument("driver", type=str, help="Driver ID")
    add_delivery_parser.add_argument("eta", type=str, help="Expected arrival (free text)")

    process_delivery_parser = subparsers.add_parser(
        "process-delivery", parents=[dry_run], help="Complete the next delivery"
    )
    process_delivery_parser.add_argument(
        "--distance",
        type=int,
        default=0,
        help="Distance driven, added to the vehicle's mileage",
    )

    # Maintenance
    subparsers.add_parser("tasks", help="List scheduled maintenance")

    schedule_parser = subparsers.add_parser(
        "schedule", parents=[dry_run], help="Schedule a maintenance task"
    )
    schedule_parser.add_argument("registration", type=str)
    schedule_parser.add_argument(
        "miles", type=int, help="Miles until service (lower = higher priority)"
    )

    process_task_parser = subparsers.add_parser(
        "process-task", parents=[dry_run], help="Service the most urgent vehicle"
    )
    process_task_parser.add_argument("--service", type=str, help="Log this service type")
    process_task_parser.add_argument("--cost", type=float, help="Cost of the service")
    process_task_parser.add_argument("--date", type=str, help="Service date YYYY-MM-DD (default: today)")

    log_parser = subparsers.add_parser(
        "log", parents=[dry_run], help="Record a completed service"
    )
    log_parser.add_argument("registration", type=str)
    log_parser.add_argument("service", type=str, help="Service type (e.g., 'Oil Change')")
    log_parser.add_argument("--cost", type=float, help="Cost of service")
    log_parser.add_argument("--date", type=str, help="Service date YYYY-MM-DD (default: today)")

    history_parser = subparsers.add_parser("history", help="View completed services")
    history_parser.add_argument("--vehicle", type=str, help="Only this vehicle")
    history_parser.add_argument("--months", type=float, help="Only the last N months")

    # Fuel
    subparsers.add_parser("fuel", help="Fuel efficiency report")

    outliers_parser = subparsers.add_parser("outliers", help="Fuel usage outliers")
    outliers_parser.add_argument(
        "--factor",
        type=float,
        default=OUTLIER_FACTOR,
        help=f"Multiple of the average counted as an outlier (default: {OUTLIER_FACTOR})",
    )

    filter_parser = subparsers.add_parser("filter-fuel", help="Filter vehicles by fuel usage")
    filter_parser.add_argument("--band", choices=FUEL_BANDS, help="Efficiency band")
    filter_parser.add_argument("--min", type=float, help="Minimum L/100km")
    filter_parser.add_argument("--max", type=float, help="Maximum L/100km")

    # Sort / search
    sort_parser = subparsers.add_parser("sort", help="Sort vehicles (timed)")
    sort_parser.add_argument("--algorithm", choices=list(SORTERS), default="merge")
    sort_parser.add_argument("--key", choices=list(SORT_KEYS), default="mileage")
    sort_parser.add_argument("--desc", action="store_true", help="Highest first")

    search_parser = subparsers.add_parser("search", help="Binary search by registration")
    search_parser.add_argument("registration", type=str)

    # Summary
    subparsers.add_parser("report", help="Fleet-wide summary report")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Validate fleet file exists
    if not args.fleet_file.exists():
        print(f"Error: File not found: {args.fleet_file}")
        return 1

    try:
        return COMMANDS[args.command](args)
    except (OSError, ValueError, KeyError, yaml.YAMLError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
