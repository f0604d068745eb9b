"""Flask web application exposing fleet data as JSON."""

import os
from pathlib import Path

from flask import Flask, abort, current_app, jsonify

from fleet import fleet_summary, fuel_report, load_fleet
from fleet.loader import fleet_to_dict

app = Flask(__name__)
app.secret_key = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-prod")

# Path to fleet data file (relative to project root)
DEFAULT_FLEET_FILE = Path(__file__).parent.parent / "data" / "fleet.yaml"
app.config["FLEET_FILE"] = Path(os.environ.get("FLEET_FILE", DEFAULT_FLEET_FILE))


def get_state():
    """Load a fresh snapshot of the fleet for this request."""
    return load_fleet(current_app.config["FLEET_FILE"])


def round_optional(value, digits=2):
    return round(value, digits) if value is not None else None


@app.errorhandler(404)
def not_found(error):
    return jsonify(error=str(error.description)), 404


@app.route("/vehicles")
def vehicles():
    """All vehicles in mileage order."""
    return jsonify(fleet_to_dict(get_state())["vehicles"])


@app.route("/vehicles/<registration>")
def vehicle_detail(registration: str):
    """One vehicle plus its scheduled maintenance and service history."""
    state = get_state()
    vehicle = state.vehicles.search_by_registration(registration)
    if vehicle is None:
        abort(404, description=f"Vehicle '{registration}' not found")

    data = fleet_to_dict(state)
    return jsonify(
        vehicle=next(v for v in data["vehicles"] if v["registration"] == registration),
        maintenance=[t for t in data["maintenance"] if t["registration"] == registration],
        records=[r for r in data["records"] if r["registration"] == registration],
    )


@app.route("/drivers")
def drivers():
    """Available drivers, next in line first."""
    return jsonify(fleet_to_dict(get_state())["drivers"])


@app.route("/deliveries")
def deliveries():
    """Pending deliveries in processing order."""
    return jsonify(fleet_to_dict(get_state())["deliveries"])


@app.route("/maintenance")
def maintenance():
    """Scheduled maintenance, most urgent first, with priority bands."""
    tasks = get_state().scheduler.show_all_tasks()
    return jsonify([
        {
            "registration": t.registration,
            "milesUntilService": t.miles_until_service,
            "priority": t.priority.name,
        }
        for t in tasks
    ])


@app.route("/reports/fuel")
def fuel():
    """Fleet fuel efficiency summary."""
    report = fuel_report(get_state().vehicles.get_all_vehicles())
    if report is None:
        return jsonify(count=0)
    return jsonify(
        count=report.count,
        average=round(report.average, 2),
        mostEfficient=report.most_efficient.registration,
        leastEfficient=report.least_efficient.registration,
        highUsage=[v.registration for v in report.high_usage],
    )


@app.route("/reports/summary")
def summary():
    """Fleet-wide counts and averages across every container."""
    report = fleet_summary(get_state())
    most_urgent = None
    if report.most_urgent is not None:
        most_urgent = {
            "registration": report.most_urgent.registration,
            "milesUntilService": report.most_urgent.miles_until_service,
        }
    return jsonify(
        totalVehicles=report.total_vehicles,
        trucks=report.trucks,
        vans=report.vans,
        averageMileage=round_optional(report.average_mileage),
        averageFuelUsage=round_optional(report.average_fuel_usage),
        availableDrivers=report.available_drivers,
        averageExperience=round_optional(report.average_experience),
        pendingDeliveries=report.pending_deliveries,
        pendingMaintenance=report.pending_maintenance,
        mostUrgent=most_urgent,
    )


if __name__ == "__main__":
    # Using 5001 to avoid conflict with macOS AirPlay Receiver on 5000
    app.run(debug=True, host="0.0.0.0", port=5001)
