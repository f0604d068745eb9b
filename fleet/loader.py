"""YAML loading and saving utilities for fleet data."""

import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .delivery import Delivery
from .driver import Driver
from .maintenance_record import MaintenanceRecord
from .maintenance_task import MaintenanceTask
from .state import FleetState
from .vehicle import UNASSIGNED, Vehicle

logger = logging.getLogger(__name__)


def _parse_vehicle(dct: Dict[str, Any]) -> Vehicle:
    return Vehicle(
        dct["registration"],
        dct["category"],
        dct["mileage"],
        dct["fuelUsage"],
        dct.get("driverId") or UNASSIGNED,
    )


def _parse_driver(dct: Dict[str, Any]) -> Driver:
    return Driver(
        dct["driverId"],
        dct["name"],
        dct.get("experienceYears", 0),
        dct.get("location", ""),
    )


def _parse_delivery(dct: Dict[str, Any]) -> Delivery:
    return Delivery(
        dct["packageId"],
        dct["origin"],
        dct["destination"],
        dct["vehicle"],
        dct.get("driverId") or UNASSIGNED,
        str(dct.get("eta", "")),
    )


def _parse_task(dct: Dict[str, Any]) -> MaintenanceTask:
    return MaintenanceTask(dct["registration"], dct["milesUntilService"])


def _parse_record(dct: Dict[str, Any]) -> MaintenanceRecord:
    return MaintenanceRecord(
        dct["registration"],
        str(dct["date"]),
        dct["service"],
        dct.get("cost") or 0.0,
    )


def load_fleet(filename: Union[str, Path], **capacities: int) -> FleetState:
    """
    Load a fleet from a YAML file and rebuild every container.

    Queues are refilled in file order, so FIFO order survives a round trip.
    Missing sections are treated as empty. `capacities` is passed through to
    FleetState (queue_capacity, scheduler_capacity); a section that does not
    fit raises ValueError rather than dropping entries.
    """
    with open(filename, "r") as fp:
        data = yaml.load(fp, Loader=yaml.SafeLoader) or {}

    state = FleetState(**capacities)
    for dct in data.get("vehicles") or []:
        if not state.add_vehicle(_parse_vehicle(dct)):
            logger.warning("Skipped duplicate vehicle %s in %s", dct["registration"], filename)
    for dct in data.get("drivers") or []:
        if not state.drivers.enqueue(_parse_driver(dct)):
            raise ValueError(
                f"{filename}: more than {state.drivers.capacity} drivers"
            )
    for dct in data.get("deliveries") or []:
        if not state.deliveries.enqueue(_parse_delivery(dct)):
            raise ValueError(
                f"{filename}: more than {state.deliveries.capacity} deliveries"
            )
    for dct in data.get("maintenance") or []:
        if not state.scheduler.add_task(_parse_task(dct)):
            raise ValueError(
                f"{filename}: more than {state.scheduler.capacity} maintenance tasks"
            )
    for dct in data.get("records") or []:
        state.records.append(_parse_record(dct))

    logger.info(
        "Loaded %d vehicles, %d drivers, %d deliveries, %d tasks from %s",
        len(state.vehicles), len(state.drivers), len(state.deliveries),
        len(state.scheduler), filename,
    )
    return state


def _vehicle_to_dict(vehicle: Vehicle) -> Dict[str, Any]:
    """Serialize a Vehicle to the YAML dict format (camelCase keys)."""
    return {
        "registration": vehicle.registration,
        "category": vehicle.category.value,
        "mileage": vehicle.mileage,
        "fuelUsage": vehicle.fuel_usage,
        "driverId": vehicle.driver_id,
    }


def _driver_to_dict(driver: Driver) -> Dict[str, Any]:
    return {
        "driverId": driver.driver_id,
        "name": driver.name,
        "experienceYears": driver.experience_years,
        "location": driver.location,
    }


def _delivery_to_dict(delivery: Delivery) -> Dict[str, Any]:
    return {
        "packageId": delivery.package_id,
        "origin": delivery.origin,
        "destination": delivery.destination,
        "vehicle": delivery.vehicle_registration,
        "driverId": delivery.driver_id,
        "eta": delivery.eta,
    }


def _task_to_dict(task: MaintenanceTask) -> Dict[str, Any]:
    return {
        "registration": task.registration,
        "milesUntilService": task.miles_until_service,
    }


def _record_to_dict(record: MaintenanceRecord) -> Dict[str, Any]:
    d: Dict[str, Any] = {
        "registration": record.registration,
        "date": record.date,
        "service": record.service,
    }
    if record.cost:
        d["cost"] = record.cost
    return d


def fleet_to_dict(state: FleetState) -> Dict[str, Any]:
    """Snapshot every container into plain YAML-ready data."""
    return {
        "vehicles": [_vehicle_to_dict(v) for v in state.vehicles.get_all_vehicles()],
        "drivers": [_driver_to_dict(d) for d in state.drivers.peek_all()],
        "deliveries": [_delivery_to_dict(d) for d in state.deliveries.peek_all()],
        "maintenance": [_task_to_dict(t) for t in state.scheduler.show_all_tasks()],
        "records": [_record_to_dict(r) for r in state.records],
    }


def save_fleet(filename: Union[str, Path], state: FleetState) -> None:
    """Write every container of `state` to a YAML file, replacing it."""
    with open(filename, "w") as fp:
        yaml.dump(
            fleet_to_dict(state),
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )
    logger.info("Saved fleet to %s", filename)
