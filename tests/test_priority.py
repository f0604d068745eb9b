#!/usr/bin/env python3
"""Tests for Priority and VehicleCategory enums."""

import pytest

from fleet import Priority, VehicleCategory


class TestPriority:
    """Tests for Priority enum ordering."""

    def test_urgency_ordering(self):
        """Lower value = more urgent."""
        assert Priority.CRITICAL.value < Priority.HIGH.value
        assert Priority.HIGH.value < Priority.MEDIUM.value
        assert Priority.MEDIUM.value < Priority.LOW.value


class TestVehicleCategory:
    """Tests for VehicleCategory parsing."""

    def test_parse_is_case_insensitive(self):
        assert VehicleCategory.parse("truck") == VehicleCategory.TRUCK
        assert VehicleCategory.parse("VAN") == VehicleCategory.VAN
        assert VehicleCategory.parse(" Van ") == VehicleCategory.VAN

    def test_parse_accepts_member(self):
        assert VehicleCategory.parse(VehicleCategory.TRUCK) is VehicleCategory.TRUCK

    def test_parse_rejects_unknown(self):
        with pytest.raises(ValueError, match="Truck/Van"):
            VehicleCategory.parse("bus")
