#!/usr/bin/env python3
"""Tests for validate_yaml schema validation."""

from pathlib import Path

from validate_yaml import load_schema, main, validate_fleet_file

SAMPLE_FILE = Path(__file__).parent.parent / "data" / "fleet.yaml"


class TestLoadSchema:
    """Tests for load_schema function."""

    def test_returns_dict(self):
        schema = load_schema()
        assert isinstance(schema, dict)

    def test_has_expected_structure(self):
        properties = load_schema()["properties"]
        for section in ("vehicles", "drivers", "deliveries", "maintenance", "records"):
            assert section in properties


class TestValidateFleetFile:
    """Tests for validate_fleet_file function."""

    def test_sample_file_is_valid(self):
        assert validate_fleet_file(SAMPLE_FILE, load_schema()) == []

    def test_valid_minimal_returns_no_errors(self, tmp_path):
        """Valid minimal fleet file returns empty error list."""
        path = tmp_path / "valid.yaml"
        path.write_text("""
vehicles:
  - registration: GT1234-22
    category: truck
    mileage: 50000
    fuelUsage: 18.5
""")
        assert validate_fleet_file(path, load_schema()) == []

    def test_empty_file_is_valid(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert validate_fleet_file(path, load_schema()) == []

    def test_missing_required_field_returns_errors(self, tmp_path):
        """Missing fuelUsage is a schema error with a path."""
        path = tmp_path / "invalid.yaml"
        path.write_text("""
vehicles:
  - registration: GT1234-22
    category: Truck
    mileage: 50000
""")
        errors = validate_fleet_file(path, load_schema())
        assert errors[0].startswith("Schema validation error:")
        assert "fuelUsage" in errors[0]
        assert errors[1] == "  at path: vehicles.0"

    def test_unknown_category(self, tmp_path):
        path = tmp_path / "invalid.yaml"
        path.write_text("""
vehicles:
  - registration: GT1234-22
    category: Bus
    mileage: 50000
    fuelUsage: 18.5
""")
        errors = validate_fleet_file(path, load_schema())
        assert any("at path: vehicles.0.category" in e for e in errors)

    def test_zero_fuel_usage(self, tmp_path):
        path = tmp_path / "invalid.yaml"
        path.write_text("""
vehicles:
  - {registration: A, category: Van, mileage: 1, fuelUsage: 0}
""")
        assert validate_fleet_file(path, load_schema())

    def test_negative_miles_until_service(self, tmp_path):
        path = tmp_path / "invalid.yaml"
        path.write_text("""
maintenance:
  - {registration: A, milesUntilService: -10}
""")
        assert validate_fleet_file(path, load_schema())

    def test_bad_record_date(self, tmp_path):
        path = tmp_path / "invalid.yaml"
        path.write_text("""
records:
  - {registration: A, date: '15/01/2025', service: Oil Change}
""")
        errors = validate_fleet_file(path, load_schema())
        assert any("records.0.date" in e for e in errors)

    def test_driver_queue_over_capacity(self, tmp_path):
        path = tmp_path / "invalid.yaml"
        path.write_text(
            "drivers:\n"
            + "".join(f"  - {{driverId: D{i}, name: N}}\n" for i in range(101))
        )
        errors = validate_fleet_file(path, load_schema())
        assert errors[0].startswith("Schema validation error:")
        assert errors[1] == "  at path: drivers"

    def test_unknown_section(self, tmp_path):
        path = tmp_path / "invalid.yaml"
        path.write_text("garage: []\n")
        assert validate_fleet_file(path, load_schema())

    def test_duplicate_registration(self, tmp_path):
        path = tmp_path / "dupes.yaml"
        path.write_text("""
vehicles:
  - {registration: A, category: Van, mileage: 1, fuelUsage: 8}
  - {registration: A, category: Truck, mileage: 2, fuelUsage: 9}
drivers:
  - {driverId: D1, name: Ama}
  - {driverId: D1, name: Kofi}
""")
        errors = validate_fleet_file(path, load_schema())
        assert errors == [
            "Duplicate registration in vehicles: A",
            "Duplicate driverId in drivers: D1",
        ]

    def test_yaml_parse_error(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("vehicles: [unclosed\n")
        errors = validate_fleet_file(path, load_schema())
        assert len(errors) == 1
        assert errors[0].startswith("YAML parse error:")

    def test_missing_file(self, tmp_path):
        errors = validate_fleet_file(tmp_path / "missing.yaml", load_schema())
        assert errors[0].startswith("Error:")


class TestMain:
    """Tests for the command-line entry point."""

    def test_all_valid(self, tmp_path, capsys):
        path = tmp_path / "ok.yaml"
        path.write_text("vehicles: []\n")
        assert main([str(path)]) == 0
        assert "OK: ok.yaml" in capsys.readouterr().out

    def test_reports_failures(self, tmp_path, capsys):
        good = tmp_path / "good.yaml"
        good.write_text("vehicles: []\n")
        bad = tmp_path / "bad.yaml"
        bad.write_text("garage: []\n")
        assert main([str(good), str(bad)]) == 1
        out = capsys.readouterr().out
        assert "OK: good.yaml" in out
        assert "FAIL: bad.yaml" in out

    def test_defaults_to_data_directory(self, capsys):
        assert main([]) == 0
        assert "OK: fleet.yaml" in capsys.readouterr().out
