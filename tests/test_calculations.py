#!/usr/bin/env python3
"""Tests for calculation helper functions."""
import pytest
from datetime import date
from pathlib import Path
from fleet import (
    Driver,
    FleetState,
    MaintenanceRecord,
    MaintenanceTask,
    Priority,
    Vehicle,
    efficiency_band,
    efficiency_rating,
    filter_by_fuel_usage,
    fleet_summary,
    fuel_outliers,
    fuel_report,
    load_fleet,
    priority_for_miles,
    records_since,
)
from fleet.calculations import average_fuel_usage

SAMPLE_FILE = Path(__file__).parent.parent / "data" / "fleet.yaml"


def make_vehicles(*fuel):
    return [Vehicle(f"V{i}", "Van", 1000 * i, f) for i, f in enumerate(fuel)]


class TestPriorityForMiles:
    """Tests for priority_for_miles banding."""

    @pytest.mark.parametrize("miles,expected", [
        (0, Priority.CRITICAL),
        (500, Priority.CRITICAL),
        (501, Priority.HIGH),
        (1000, Priority.HIGH),
        (1001, Priority.MEDIUM),
        (2000, Priority.MEDIUM),
        (2001, Priority.LOW),
    ])
    def test_bands(self, miles, expected):
        """Upper bounds are inclusive."""
        assert priority_for_miles(miles) is expected


class TestEfficiency:
    """Tests for efficiency_rating and efficiency_band."""

    @pytest.mark.parametrize("fuel,expected", [
        (7.9, "Excellent"),
        (8.0, "Good"),
        (12.0, "Good"),
        (12.1, "Fair"),
        (15.0, "Fair"),
        (15.1, "Poor"),
    ])
    def test_rating(self, fuel, expected):
        assert efficiency_rating(fuel) == expected

    @pytest.mark.parametrize("fuel,expected", [
        (7.4, "High"),
        (8.0, "Medium"),
        (12.0, "Medium"),
        (12.5, "Low"),
    ])
    def test_band(self, fuel, expected):
        assert efficiency_band(fuel) == expected


class TestFuelReport:
    """Tests for fuel_report summary."""

    def test_empty_fleet(self):
        """None when there is nothing to report."""
        assert fuel_report([]) is None
        assert average_fuel_usage([]) is None

    def test_summary(self):
        vehicles = make_vehicles(10.0, 6.0, 20.0, 16.0)
        report = fuel_report(vehicles)
        assert report.count == 4
        assert report.average == pytest.approx(13.0)
        assert report.most_efficient.registration == "V1"
        assert report.least_efficient.registration == "V2"
        assert [v.registration for v in report.high_usage] == ["V2", "V3"]

    def test_ties_keep_first(self):
        vehicles = make_vehicles(9.0, 9.0)
        report = fuel_report(vehicles)
        assert report.most_efficient.registration == "V0"
        assert report.least_efficient.registration == "V0"

    def test_exactly_fifteen_is_not_high_usage(self):
        assert fuel_report(make_vehicles(15.0)).high_usage == []


class TestFuelOutliers:
    """Tests for fuel_outliers."""

    def test_outliers_above_factor(self):
        vehicles = make_vehicles(10.0, 10.0, 10.0, 30.0)
        # average 15, threshold 22.5
        assert [v.registration for v in fuel_outliers(vehicles)] == ["V3"]

    def test_custom_factor(self):
        vehicles = make_vehicles(10.0, 20.0)
        assert [v.registration for v in fuel_outliers(vehicles, factor=1.2)] == ["V1"]

    def test_empty(self):
        assert fuel_outliers([]) == []


class TestFilterByFuelUsage:
    """Tests for filter_by_fuel_usage bounds."""

    def test_inclusive_bounds(self):
        vehicles = make_vehicles(7.0, 8.0, 12.0, 13.0)
        result = filter_by_fuel_usage(vehicles, 8.0, 12.0)
        assert [v.fuel_usage for v in result] == [8.0, 12.0]

    def test_open_bounds(self):
        vehicles = make_vehicles(7.0, 13.0)
        assert len(filter_by_fuel_usage(vehicles)) == 2
        assert [v.fuel_usage for v in filter_by_fuel_usage(vehicles, minimum=10)] == [13.0]
        assert [v.fuel_usage for v in filter_by_fuel_usage(vehicles, maximum=10)] == [7.0]


class TestRecordsSince:
    """Tests for records_since date window."""

    def make_records(self):
        return [
            MaintenanceRecord("A", "2025-01-10", "Oil Change"),
            MaintenanceRecord("A", "2025-04-30", "Tyres", 800),
            MaintenanceRecord("B", "2025-06-01", "Brakes", 450),
        ]

    def test_whole_months(self):
        records = records_since(self.make_records(), 2, today=date(2025, 6, 15))
        assert [r.service for r in records] == ["Brakes"]

    def test_fractional_months(self):
        """1.5 months = 1 month + 15 days; cutoff is inclusive."""
        records = records_since(self.make_records(), 1.5, today=date(2025, 6, 15))
        assert [r.service for r in records] == ["Tyres", "Brakes"]

    def test_wide_window(self):
        records = records_since(self.make_records(), 12, today=date(2025, 6, 15))
        assert len(records) == 3

    def test_bad_date_raises(self):
        records = [MaintenanceRecord("A", "15/01/2025", "Oil Change")]
        with pytest.raises(ValueError):
            records_since(records, 6, today=date(2025, 6, 15))


class TestFleetSummary:
    """Tests for the fleet-wide summary."""

    def test_sample_fleet(self):
        summary = fleet_summary(load_fleet(SAMPLE_FILE))
        assert summary.total_vehicles == 4
        assert (summary.trucks, summary.vans) == (2, 2)
        assert summary.average_mileage == pytest.approx(52500.0)
        assert summary.average_fuel_usage == pytest.approx(12.3)
        assert summary.available_drivers == 2
        assert summary.average_experience == pytest.approx(4.5)
        assert summary.pending_deliveries == 1
        assert summary.pending_maintenance == 2
        assert summary.most_urgent.registration == "GT1234-22"
        assert summary.most_urgent.miles_until_service == 400

    def test_empty_fleet(self):
        """Averages and the most urgent task are None with nothing to summarize."""
        summary = fleet_summary(FleetState())
        assert summary.total_vehicles == summary.trucks == summary.vans == 0
        assert summary.average_mileage is None
        assert summary.average_fuel_usage is None
        assert summary.average_experience is None
        assert summary.pending_maintenance == 0
        assert summary.most_urgent is None

    def test_follows_queue_changes(self):
        state = FleetState()
        state.add_driver(Driver("D1", "Ama", 2, "Accra"))
        state.add_driver(Driver("D2", "Kofi", 10, "Kumasi"))
        state.drivers.dequeue()
        state.schedule_maintenance(MaintenanceTask("A", 900))
        state.schedule_maintenance(MaintenanceTask("B", 150))
        summary = fleet_summary(state)
        assert summary.available_drivers == 1
        assert summary.average_experience == pytest.approx(10.0)
        assert summary.most_urgent.registration == "B"
