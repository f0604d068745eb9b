#!/usr/bin/env python3
"""Tests for the snapshot sort and search algorithms."""

import itertools
import random

import pytest

from fleet import (
    InvalidSortKeyError,
    Vehicle,
    VehicleIndex,
    binary_search,
    merge_sort,
    quick_sort,
    sort_vehicles,
)
from fleet.algorithms import resolve_key


def make_fleet():
    return [
        Vehicle("GT1234-22", "Truck", 50000, 18.5, "D01"),
        Vehicle("aa0001-20", "Van", 30000, 9.2, "d02"),
        Vehicle("GW5521-21", "Van", 70000, 7.4),
        Vehicle("BR4410-20", "Truck", 30000, 14.1, "D03"),
    ]


class TestSorts:
    """quick_sort and merge_sort agree with sorted()."""

    @pytest.mark.parametrize("sorter", [quick_sort, merge_sort])
    def test_empty_and_single(self, sorter):
        assert sorter([]).items == []
        vehicle = make_fleet()[0]
        assert sorter([vehicle]).items == [vehicle]

    @pytest.mark.parametrize("sorter", [quick_sort, merge_sort])
    @pytest.mark.parametrize("key", ["mileage", "registration", "driver", "fuel_usage"])
    def test_matches_sorted(self, sorter, key):
        fleet = make_fleet()
        key_func = resolve_key(key)
        result = sorter(fleet, key)
        assert [key_func(v) for v in result.items] == sorted(key_func(v) for v in fleet)
        assert result.key == key

    @pytest.mark.parametrize("sorter", [quick_sort, merge_sort])
    def test_random_integers(self, sorter):
        rng = random.Random(1)
        for size in (2, 3, 10, 57, 200):
            values = [rng.randint(-50, 50) for _ in range(size)]
            assert sorter(values, key=lambda n: n).items == sorted(values)

    @pytest.mark.parametrize("sorter", [quick_sort, merge_sort])
    def test_large_sorted_snapshot(self, sorter):
        """Already-sorted input is quicksort's worst case; 3,000 items must still sort."""
        snapshot = [Vehicle(f"R{i:05d}", "Van", i, 9.0) for i in range(3000)]
        result = sorter(snapshot, "mileage")
        assert [v.mileage for v in result.items] == list(range(3000))

    def test_large_reversed_snapshot(self):
        values = list(range(3000, 0, -1))
        assert quick_sort(values, key=lambda n: n).items == sorted(values)

    def test_quick_and_merge_agree(self):
        fleet = make_fleet()
        quick = [v.fuel_usage for v in quick_sort(fleet, "fuel_usage").items]
        merge = [v.fuel_usage for v in merge_sort(fleet, "fuel_usage").items]
        assert quick == merge == [7.4, 9.2, 14.1, 18.5]

    def test_agree_on_every_permutation(self):
        """Both sorts give the index order for every arrangement of the fleet."""
        index = VehicleIndex()
        for vehicle in make_fleet()[:3]:
            index.insert(vehicle)
        expected = index.get_all_vehicles()
        for order in itertools.permutations(expected):
            assert quick_sort(order, "mileage").items == expected
            assert merge_sort(order, "mileage").items == expected

    @pytest.mark.parametrize("sorter", [quick_sort, merge_sort])
    def test_input_not_mutated(self, sorter):
        fleet = make_fleet()
        before = list(fleet)
        result = sorter(fleet, "registration")
        assert fleet == before
        assert result.items is not fleet

    def test_merge_sort_is_stable(self):
        """Equal mileages keep their input order."""
        fleet = make_fleet()
        result = merge_sort(fleet, "mileage")
        assert [v.registration for v in result.items] == [
            "aa0001-20", "BR4410-20", "GT1234-22", "GW5521-21",
        ]

    def test_string_keys_ignore_case(self):
        result = merge_sort(make_fleet(), "registration")
        assert [v.registration for v in result.items] == [
            "aa0001-20", "BR4410-20", "GT1234-22", "GW5521-21",
        ]

    def test_instrumentation(self):
        result = quick_sort(make_fleet(), "mileage")
        assert result.algorithm == "quick"
        assert result.comparisons > 0
        assert result.elapsed_ms >= 0

    def test_invalid_key(self):
        with pytest.raises(InvalidSortKeyError):
            merge_sort(make_fleet(), "colour")
        with pytest.raises(ValueError):
            quick_sort(make_fleet(), "colour")

    def test_sort_vehicles_dispatch(self):
        result = sort_vehicles(make_fleet(), "quick", "fuel_usage")
        assert result.algorithm == "quick"
        assert result.items[0].registration == "GW5521-21"

    def test_sort_vehicles_bad_algorithm(self):
        with pytest.raises(InvalidSortKeyError):
            sort_vehicles(make_fleet(), "bubble")


class TestBinarySearch:
    """binary_search over a registration-sorted snapshot."""

    def test_empty(self):
        result = binary_search([], "GT1234-22")
        assert not result.found
        assert result.item is None
        assert result.comparisons == 0

    def test_single(self):
        vehicle = make_fleet()[0]
        assert binary_search([vehicle], "GT1234-22").item is vehicle
        assert not binary_search([vehicle], "ZZ").found

    def test_every_element_found(self):
        ordered = merge_sort(make_fleet(), "registration").items
        for vehicle in ordered:
            result = binary_search(ordered, vehicle.registration)
            assert result.item is vehicle
            assert 1 <= result.comparisons <= 3

    def test_case_insensitive(self):
        ordered = merge_sort(make_fleet(), "registration").items
        assert binary_search(ordered, "AA0001-20").item.registration == "aa0001-20"
        assert binary_search(ordered, "gt1234-22").found

    def test_missing(self):
        ordered = merge_sort(make_fleet(), "registration").items
        for target in ("A", "CC", "ZZZ"):
            assert binary_search(ordered, target).item is None

    def test_by_other_key(self):
        ordered = merge_sort(make_fleet(), "fuel_usage").items
        assert binary_search(ordered, 14.1, key="fuel_usage").item.registration == "BR4410-20"

    def test_large_sorted_list(self):
        values = list(range(0, 2000, 2))
        result = binary_search(values, 1234, key=lambda n: n)
        assert result.item == 1234
        assert result.comparisons <= 11
        assert not binary_search(values, 1235, key=lambda n: n).found

    def test_invalid_key(self):
        with pytest.raises(InvalidSortKeyError):
            binary_search(make_fleet(), "x", key="colour")
