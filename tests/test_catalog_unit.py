#!/usr/bin/env python3
"""
this_file: tests/test_catalog_unit.py

Unit tests for VehicleCatalog ordering, lookups and the demo catalog.
"""

import unittest

import pytest

from vehicle_gallery.core.catalog import VehicleCatalog, default_catalog
from vehicle_gallery.core.vehicle import Vehicle


class TestVehicleCatalog(unittest.TestCase):
    """Catalog behaviour independent of the demo data."""

    def setUp(self):
        self.vehicles = [
            Vehicle(name="Millennium Falcon"),
            Vehicle(name="A-Wing"),
            Vehicle(name="B-Wing"),
        ]
        self.catalog = VehicleCatalog(self.vehicles)

    def test_list_preserves_insertion_order(self):
        """Display order is construction order, not alphabetical."""
        assert [v.name for v in self.catalog.list()] == ["Millennium Falcon", "A-Wing", "B-Wing"]

    def test_list_is_stable_across_calls(self):
        first = self.catalog.list()
        second = self.catalog.list()
        assert first == second
        assert [v.name for v in first] == [v.name for v in second]

    def test_catalog_is_isolated_from_source_list(self):
        """Mutating the input list after construction does not change the catalog."""
        self.vehicles.append(Vehicle(name="Y-Wing"))
        assert len(self.catalog) == 3
        assert "Y-Wing" not in self.catalog

    def test_get_and_get_required(self):
        assert self.catalog.get("A-Wing") is self.vehicles[1]
        assert self.catalog.get("Slave I") is None
        assert self.catalog.get_required("B-Wing").name == "B-Wing"
        with pytest.raises(KeyError, match="Slave I"):
            self.catalog.get_required("Slave I")

    def test_iteration_and_names(self):
        assert [v.name for v in self.catalog] == list(self.catalog.names())
        assert "Millennium Falcon" in self.catalog

    def test_duplicate_names_rejected(self):
        with pytest.raises(ValueError, match="Duplicate"):
            VehicleCatalog([Vehicle(name="A-Wing"), Vehicle(name="A-Wing")])

    def test_non_vehicle_rejected(self):
        with pytest.raises(ValueError, match="Vehicle instances"):
            VehicleCatalog(["A-Wing"])

    def test_empty_catalog(self):
        catalog = VehicleCatalog([])
        assert catalog.list() == ()
        assert len(catalog) == 0


class TestDefaultCatalog(unittest.TestCase):
    """The demo catalog with its two vehicles."""

    def test_default_order_and_flags(self):
        catalog = default_catalog()
        x_wing, tie_fighter = catalog.list()

        assert x_wing.name == "X-Wing Starfighter"
        assert x_wing.simulate_failure is True
        assert tie_fighter.name == "Darth Vader's TIE Fighter"
        assert tie_fighter.simulate_failure is False

    def test_failure_flags_are_per_catalog(self):
        """Flags are arguments of each catalog, not shared state."""
        failing = default_catalog(fail_x_wing=True, fail_tie_fighter=True)
        working = default_catalog(fail_x_wing=False, fail_tie_fighter=False)

        assert all(v.simulate_failure for v in failing)
        assert not any(v.simulate_failure for v in working)

    def test_every_default_vehicle_has_a_locator(self):
        for vehicle in default_catalog():
            assert vehicle.locator is not None
            assert vehicle.locator.params["region"]


if __name__ == "__main__":
    unittest.main()
